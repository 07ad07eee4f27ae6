"""Run the resolver and the uploader for one invocation."""

from __future__ import annotations

import dataclasses
import typing as typ
from pathlib import Path

from . import workflow
from .errors import InputError
from .glob_utils import expand_file_pattern
from .models import UploadStatus
from .resolver import resolve_release
from .uploader import upload_to_release

if typ.TYPE_CHECKING:
    from .api import ReleaseApi
    from .config import UploadConfig
    from .models import UploadResult

__all__ = ["RunReport", "collect_uploads", "publish"]


@dataclasses.dataclass(slots=True)
class RunReport:
    """Accumulates per-file results and failures for one run.

    Attributes
    ----------
    results : list[UploadResult]
        Outcome of every processed file, in processing order.
    failures : list[str]
        Messages for files that could not be published.
    """

    results: list[UploadResult] = dataclasses.field(default_factory=list)
    failures: list[str] = dataclasses.field(default_factory=list)

    @property
    def failed(self) -> bool:
        """``True`` when at least one file failed."""
        return bool(self.failures)

    @property
    def browser_download_urls(self) -> list[str]:
        """Every URL surfaced so far, in processing order."""
        return [
            result.browser_download_url
            for result in self.results
            if result.browser_download_url is not None
        ]

    @property
    def browser_download_url(self) -> str | None:
        """URL of the last file that produced one."""
        urls = self.browser_download_urls
        return urls[-1] if urls else None

    def record(self, result: UploadResult) -> None:
        """Store ``result`` and register duplicates as failures."""
        self.results.append(result)
        if result.status is UploadStatus.DUPLICATE:
            message = f"An asset called {result.asset_name} already exists."
            workflow.error(message, title="Duplicate asset")
            self.failures.append(message)

    def outputs(self) -> dict[str, str | list[str]]:
        """Return the workflow outputs describing this run."""
        if (url := self.browser_download_url) is None:
            return {}
        return {
            "browser_download_url": url,
            "browser_download_urls": self.browser_download_urls,
        }


def collect_uploads(config: UploadConfig, *, root: Path) -> list[tuple[Path, str]]:
    """Return ``(path, asset_name)`` pairs to upload, in upload order.

    Glob matches are named after their file name; a single file uses the
    explicit asset name when one was given.

    Raises
    ------
    InputError
        Raised when ``file_glob`` is set and nothing matches, or when the
        single file does not exist.
    """
    if config.file_glob:
        files = expand_file_pattern(config.file, root=root)
        if not files:
            message = "No files matching the glob pattern found."
            raise InputError(message)
        return [(path, path.name) for path in files]

    path = root / config.file
    if not path.exists():
        message = f"File not found: {path}"
        raise InputError(message)
    return [(path, config.asset_name or path.name)]


def publish(
    config: UploadConfig,
    api: ReleaseApi,
    *,
    root: Path | None = None,
    report: RunReport | None = None,
) -> RunReport:
    """Resolve the release for ``config.tag`` and upload every file to it.

    Files are discovered before any API call so an empty glob never touches
    GitHub. A duplicate asset marks the run as failed without stopping the
    remaining uploads.

    Parameters
    ----------
    config : UploadConfig
        Normalised run configuration.
    api : ReleaseApi
        Authenticated release API client.
    root : Path | None, optional
        Directory relative paths and patterns are resolved against; the
        current directory when omitted.
    report : RunReport | None, optional
        Accumulator to record results into. Passing one lets the caller read
        the files published before an exception aborted the run.

    Returns
    -------
    RunReport
        Per-file outcomes and the failures to report.

    Raises
    ------
    InputError
        Raised when no file matches the glob or a file is missing.
    RemoteError
        Raised when any GitHub call fails.
    """
    uploads = collect_uploads(config, root=root or Path())
    release = resolve_release(
        api,
        config.repo,
        config.tag,
        prerelease=config.prerelease,
        name=config.release_name,
        body=config.body,
        overwrite=config.overwrite,
        promote=config.promote,
    )

    report = RunReport() if report is None else report
    for path, asset_name in uploads:
        report.record(
            upload_to_release(
                api,
                config.repo,
                release,
                path,
                asset_name,
                overwrite=config.overwrite,
            )
        )
    return report
