"""Helpers for writing GitHub Actions outputs."""

from __future__ import annotations

import sys
import typing as typ
import uuid
from collections.abc import Mapping, Sequence
from pathlib import Path

__all__ = ["export_outputs", "write_github_output"]


def _render(value: str | Sequence[str]) -> str:
    if isinstance(value, Sequence) and not isinstance(value, str):
        return "\n".join(value)
    return str(value)


def write_github_output(
    file: Path, values: Mapping[str, str | Sequence[str]]
) -> None:
    """Append ``values`` to ``file`` using GitHub's multiline syntax.

    Parameters
    ----------
    file:
        Path to the GitHub Actions output file (typically ``GITHUB_OUTPUT``).
    values:
        Mapping of output keys to string or sequence values. Sequence values
        are joined with newlines before being written.
    """

    file.parent.mkdir(parents=True, exist_ok=True)
    with file.open("a", encoding="utf-8") as handle:
        for key, value in values.items():
            delimiter = f"EOF_{uuid.uuid4().hex}"
            handle.write(f"{key}<<{delimiter}\n")
            handle.write(_render(value))
            handle.write(f"\n{delimiter}\n")


def export_outputs(
    values: Mapping[str, str | Sequence[str]],
    github_output: Path | None,
    *,
    stream: typ.TextIO | None = None,
) -> None:
    """Write ``values`` to ``github_output`` or echo them when running locally.

    Outside GitHub Actions there is no output file, so each value is printed
    as a ``key=value`` line instead.
    """
    if github_output is not None:
        write_github_output(github_output, values)
        return
    out = stream or sys.stdout
    for key, value in values.items():
        print(f"{key}={_render(value)}", file=out)
