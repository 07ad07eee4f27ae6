"""Remote release API consumed by the resolver and the uploader."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from .models import (
        AssetDescriptor,
        Release,
        ReleaseAsset,
        ReleaseLookup,
        ReleasePatch,
        RepoRef,
    )

__all__ = ["ReleaseApi"]


class ReleaseApi(typ.Protocol):
    """Authenticated GitHub release endpoints.

    Every method except :meth:`get_release_by_tag` raises
    :class:`~release_upload.errors.RemoteError` on failure.
    """

    def get_release_by_tag(self, repo: RepoRef, tag: str) -> ReleaseLookup:
        """Return the release for ``tag`` as a tagged lookup outcome."""
        ...

    def create_release(
        self, repo: RepoRef, *, tag: str, name: str, body: str, prerelease: bool
    ) -> Release: ...

    def update_release(
        self, repo: RepoRef, release_id: int, patch: ReleasePatch
    ) -> Release: ...

    def list_release_assets(
        self, repo: RepoRef, release_id: int
    ) -> list[ReleaseAsset]:
        """Return every asset of the release, all pages merged."""
        ...

    def delete_release_asset(self, repo: RepoRef, asset_id: int) -> None: ...

    def upload_release_asset(
        self, upload_url: str, asset: AssetDescriptor
    ) -> ReleaseAsset: ...
