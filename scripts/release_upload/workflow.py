"""GitHub workflow command helpers.

Diagnostics are written to stderr as workflow commands so the Actions runner
can annotate the job: ``::debug::`` lines only appear when step debugging is
enabled.
"""

from __future__ import annotations

import sys
import typing as typ

__all__ = ["debug", "error"]


def _escape_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _emit(
    command: str, message: str, title: str | None, stream: typ.TextIO | None
) -> None:
    properties = f" title={title}" if title else ""
    print(
        f"::{command}{properties}::{_escape_data(message)}",
        file=stream or sys.stderr,
    )


def debug(message: str, *, stream: typ.TextIO | None = None) -> None:
    """Emit a ``::debug::`` workflow command."""
    _emit("debug", message, None, stream)


def error(
    message: str, *, title: str | None = None, stream: typ.TextIO | None = None
) -> None:
    """Emit an ``::error::`` workflow command."""
    _emit("error", message, title, stream)
