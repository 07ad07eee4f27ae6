"""Glob expansion for the ``file_glob`` input."""

from __future__ import annotations

from pathlib import Path, PurePath, PurePosixPath, PureWindowsPath

__all__ = ["expand_file_pattern", "glob_root_and_pattern"]


def expand_file_pattern(pattern: str, *, root: Path) -> list[Path]:
    """Return every path matching ``pattern`` in a stable order.

    Relative patterns are evaluated beneath ``root``. Directories are kept in
    the result: the uploader decides what to do with entries that are not
    regular files.

    Examples
    --------
    >>> expand_file_pattern("dist/*.tar.gz", root=Path("."))  # doctest: +SKIP
    [PosixPath('dist/app-linux.tar.gz'), PosixPath('dist/app-macos.tar.gz')]
    """
    candidate = Path(pattern)
    if candidate.is_absolute():
        matches = _resolve_absolute_glob(candidate)
    elif (windows_candidate := PureWindowsPath(pattern)).is_absolute():
        matches = _resolve_windows_absolute_glob(windows_candidate)
    else:
        matches = list(root.glob(pattern))
    return sorted(matches, key=lambda path: path.as_posix())


def _resolve_absolute_glob(candidate: Path) -> list[Path]:
    root_text, pattern = glob_root_and_pattern(candidate)
    return list(Path(root_text).glob(pattern))


def _resolve_windows_absolute_glob(
    windows_candidate: PureWindowsPath,
) -> list[Path]:
    anchor = Path(windows_candidate.anchor)
    relative = PureWindowsPath(*windows_candidate.parts[1:]).as_posix()
    return list(anchor.glob(relative))


def glob_root_and_pattern(candidate: PurePath) -> tuple[str, str]:
    """Return the filesystem root and relative glob pattern for ``candidate``."""
    anchor = candidate.anchor
    if not anchor:
        message = f"Expected absolute path, received '{candidate}'"
        raise ValueError(message)

    root_text = (candidate.drive + candidate.root) or anchor or "/"
    relative_parts = candidate.parts[1:]
    pattern = PurePosixPath(*relative_parts).as_posix() if relative_parts else "*"
    return root_text, pattern
