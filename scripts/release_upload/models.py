"""Value objects exchanged between the resolver, uploader and API client.

The GitHub payloads are reduced to the handful of fields the helper reads so
tests can build them by hand::

    release = Release.from_payload(
        {
            "id": 1,
            "tag_name": "v1.0.0",
            "name": "v1.0.0",
            "body": "",
            "prerelease": False,
            "upload_url": "https://uploads.github.com/repos/o/r/releases/1/assets{?name,label}",
        }
    )
"""

from __future__ import annotations

import dataclasses
import enum
import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    from .errors import RemoteError

__all__ = [
    "AssetDescriptor",
    "LookupStatus",
    "Release",
    "ReleaseAsset",
    "ReleaseLookup",
    "ReleasePatch",
    "RepoRef",
    "UploadResult",
    "UploadStatus",
]


@dataclasses.dataclass(slots=True, frozen=True)
class RepoRef:
    """Repository targeted by every API call."""

    owner: str
    name: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclasses.dataclass(slots=True, frozen=True)
class Release:
    """Release handle shared by the resolver and the uploader."""

    id: int
    tag_name: str
    name: str
    body: str
    prerelease: bool
    upload_url: str

    @classmethod
    def from_payload(cls, payload: typ.Mapping[str, typ.Any]) -> Release:
        """Build a release from a GitHub REST payload.

        GitHub reports ``null`` for an unset name or body; both are read as
        empty strings so comparisons against the action inputs line up.
        """
        return cls(
            id=int(payload["id"]),
            tag_name=str(payload["tag_name"]),
            name=payload.get("name") or "",
            body=payload.get("body") or "",
            prerelease=bool(payload.get("prerelease", False)),
            upload_url=str(payload["upload_url"]),
        )


@dataclasses.dataclass(slots=True, frozen=True)
class ReleaseAsset:
    """Asset already attached to a release."""

    id: int
    name: str
    browser_download_url: str

    @classmethod
    def from_payload(cls, payload: typ.Mapping[str, typ.Any]) -> ReleaseAsset:
        """Build an asset from a GitHub REST payload."""
        return cls(
            id=int(payload["id"]),
            name=str(payload["name"]),
            browser_download_url=str(payload["browser_download_url"]),
        )


@dataclasses.dataclass(slots=True, frozen=True)
class AssetDescriptor:
    """Local file loaded into memory and ready to upload."""

    name: str
    size: int
    content: bytes
    release_id: int

    @classmethod
    def from_path(cls, path: Path, *, name: str, release_id: int) -> AssetDescriptor:
        """Read ``path`` fully and measure its size."""
        content = path.read_bytes()
        return cls(name=name, size=len(content), content=content, release_id=release_id)


@dataclasses.dataclass(slots=True)
class ReleasePatch:
    """Pending metadata changes for an existing release.

    ``None`` marks a field that should be left untouched.
    """

    prerelease: bool | None = None
    name: str | None = None
    body: str | None = None

    def __bool__(self) -> bool:
        return bool(self.as_fields())

    def as_fields(self) -> dict[str, bool | str]:
        """Return only the fields that should be sent to GitHub."""
        fields = {
            "prerelease": self.prerelease,
            "name": self.name,
            "body": self.body,
        }
        return {key: value for key, value in fields.items() if value is not None}


class LookupStatus(enum.Enum):
    """Outcome of looking a release up by tag."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclasses.dataclass(slots=True, frozen=True)
class ReleaseLookup:
    """Tagged result of :meth:`ReleaseApi.get_release_by_tag`."""

    status: LookupStatus
    release: Release | None = None
    error: RemoteError | None = None

    @classmethod
    def found(cls, release: Release) -> ReleaseLookup:
        return cls(LookupStatus.FOUND, release=release)

    @classmethod
    def not_found(cls) -> ReleaseLookup:
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def failed(cls, error: RemoteError) -> ReleaseLookup:
        return cls(LookupStatus.FAILED, error=error)

    def unwrap(self) -> Release:
        """Return the found release or raise the carried failure.

        Raises
        ------
        RemoteError
            Raised unchanged for a ``failed`` lookup.
        LookupError
            Raised for a ``not_found`` lookup, which has no release to return.
        """
        if self.error is not None:
            raise self.error
        if self.release is None:
            message = "Release lookup did not find a release"
            raise LookupError(message)
        return self.release


class UploadStatus(enum.Enum):
    """What happened to a single file."""

    UPLOADED = "uploaded"
    SKIPPED = "skipped"
    DUPLICATE = "duplicate"


@dataclasses.dataclass(slots=True, frozen=True)
class UploadResult:
    """Outcome of uploading one file.

    ``browser_download_url`` holds the new asset's URL for uploads and the
    surviving asset's URL for rejected duplicates.
    """

    path: Path
    asset_name: str
    status: UploadStatus
    browser_download_url: str | None = None
