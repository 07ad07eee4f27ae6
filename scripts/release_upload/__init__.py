"""Public interface for the release upload helper package."""

from .config import UploadConfig, build_config
from .errors import InputError, ReleaseUploadError, RemoteError
from .gh_client import GhReleaseApi
from .github_output import export_outputs
from .models import Release, ReleaseAsset, RepoRef, UploadResult, UploadStatus
from .publish import RunReport, publish
from .resolver import resolve_release
from .uploader import upload_to_release

__all__ = [
    "build_config",
    "export_outputs",
    "GhReleaseApi",
    "InputError",
    "publish",
    "Release",
    "ReleaseAsset",
    "ReleaseUploadError",
    "RemoteError",
    "RepoRef",
    "resolve_release",
    "RunReport",
    "upload_to_release",
    "UploadConfig",
    "UploadResult",
    "UploadStatus",
]
