"""Upload a single file as a release asset without creating duplicates.

Each upload is a two step affair: :func:`plan_upload` decides what to do from
a fresh snapshot of the release assets, then :func:`upload_to_release` carries
the decision out. The snapshot is taken again for every file so each decision
only depends on the state GitHub reported for that file.
"""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

from . import workflow
from .errors import InputError
from .models import AssetDescriptor, UploadResult, UploadStatus

if typ.TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from .api import ReleaseApi
    from .models import Release, ReleaseAsset, RepoRef

__all__ = ["UploadAction", "UploadPlan", "plan_upload", "upload_to_release"]


class UploadAction(enum.Enum):
    """Decision taken for an asset name."""

    CREATE = "create"
    REPLACE = "replace"
    REJECT = "reject"


@dataclasses.dataclass(slots=True, frozen=True)
class UploadPlan:
    """Planned action plus the same-named asset already on the release."""

    action: UploadAction
    existing: ReleaseAsset | None = None


def plan_upload(
    existing_assets: Iterable[ReleaseAsset], asset_name: str, *, overwrite: bool
) -> UploadPlan:
    """Decide how to publish ``asset_name`` given the current assets.

    Examples
    --------
    >>> plan_upload([], "app.zip", overwrite=False)
    UploadPlan(action=<UploadAction.CREATE: 'create'>, existing=None)
    """
    duplicate = next(
        (asset for asset in existing_assets if asset.name == asset_name), None
    )
    if duplicate is None:
        return UploadPlan(UploadAction.CREATE)
    if overwrite:
        return UploadPlan(UploadAction.REPLACE, duplicate)
    return UploadPlan(UploadAction.REJECT, duplicate)


def upload_to_release(
    api: ReleaseApi,
    repo: RepoRef,
    release: Release,
    path: Path,
    asset_name: str,
    *,
    overwrite: bool,
) -> UploadResult:
    """Upload ``path`` to ``release`` as ``asset_name``.

    Parameters
    ----------
    api : ReleaseApi
        Client used for listing, deleting and uploading assets.
    repo : RepoRef
        Repository owning ``release``.
    release : Release
        Release returned by :func:`~release_upload.resolver.resolve_release`.
    path : Path
        Local file to publish.
    asset_name : str
        Name the asset should carry on the release.
    overwrite : bool
        Delete a same-named asset before uploading instead of rejecting.

    Returns
    -------
    UploadResult
        ``uploaded`` with the new download URL, ``skipped`` when ``path`` is
        not a regular file, or ``duplicate`` with the URL of the asset that
        was left in place.

    Raises
    ------
    InputError
        Raised when ``path`` does not exist.
    RemoteError
        Raised when listing, deleting or uploading fails.
    """
    tag = release.tag_name
    if not path.exists():
        message = f"File not found: {path}"
        raise InputError(message)
    if not path.is_file():
        workflow.debug(f"Skipping {path}, since its not a file")
        return UploadResult(path, asset_name, UploadStatus.SKIPPED)

    asset = AssetDescriptor.from_path(path, name=asset_name, release_id=release.id)

    existing_assets = api.list_release_assets(repo, release.id)
    plan = plan_upload(existing_assets, asset_name, overwrite=overwrite)

    duplicate = plan.existing
    if duplicate is None:
        workflow.debug(
            f"No pre-existing asset called {asset_name} found in release {tag}. "
            "All good."
        )
    elif plan.action is UploadAction.REJECT:
        return UploadResult(
            path, asset_name, UploadStatus.DUPLICATE, duplicate.browser_download_url
        )
    else:
        workflow.debug(
            f"An asset called {asset_name} already exists in release {tag} "
            "so we'll overwrite it."
        )
        api.delete_release_asset(repo, duplicate.id)

    workflow.debug(f"Uploading {path} to {asset_name} in release {tag}.")
    uploaded = api.upload_release_asset(release.upload_url, asset)
    return UploadResult(
        path, asset_name, UploadStatus.UPLOADED, uploaded.browser_download_url
    )
