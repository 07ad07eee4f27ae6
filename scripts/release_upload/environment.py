"""Environment helpers for reading the GitHub Actions runner context."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .errors import InputError

__all__ = ["ambient_repository", "optional_env_path"]


def ambient_repository(environ: typ.Mapping[str, str]) -> str:
    """Return the ``owner/name`` of the repository running the workflow.

    Parameters
    ----------
    environ:
        Environment mapping, normally :data:`os.environ`.

    Raises
    ------
    InputError
        Raised when ``GITHUB_REPOSITORY`` is unset or empty.
    """
    value = environ.get("GITHUB_REPOSITORY")
    if not value:
        message = (
            "Environment variable 'GITHUB_REPOSITORY' is not set; "
            "pass 'repo_name' to choose the target repository."
        )
        raise InputError(message)
    return value


def optional_env_path(environ: typ.Mapping[str, str], name: str) -> Path | None:
    """Return ``Path`` value for ``name`` or ``None`` when it is unset."""
    value = environ.get(name)
    return Path(value) if value else None
