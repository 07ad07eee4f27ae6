"""Find, create or reconcile the release that receives the assets."""

from __future__ import annotations

import typing as typ

from . import workflow
from .models import LookupStatus, ReleasePatch

if typ.TYPE_CHECKING:
    from .api import ReleaseApi
    from .models import Release, RepoRef

__all__ = ["build_release_patch", "resolve_release"]


def build_release_patch(
    release: Release, *, name: str, body: str, overwrite: bool, promote: bool
) -> ReleasePatch:
    """Return the metadata changes needed to bring ``release`` in line.

    Promotion only ever clears the prerelease flag. Name and body are only
    compared when ``overwrite`` is set.

    Parameters
    ----------
    release : Release
        Release as currently published.
    name : str
        Desired display name.
    body : str
        Desired description.
    overwrite : bool
        Replace a differing name or body.
    promote : bool
        Turn a prerelease into a full release.

    Returns
    -------
    ReleasePatch
        Possibly empty patch; an empty patch is falsy.

    Examples
    --------
    >>> from release_upload.models import Release
    >>> current = Release(1, "v1", "v1", "notes", True, "https://uploads")
    >>> build_release_patch(current, name="v1", body="", overwrite=False, promote=True)
    ReleasePatch(prerelease=False, name=None, body=None)
    """
    tag = release.tag_name
    patch = ReleasePatch()
    if promote and release.prerelease:
        workflow.debug(f"The {tag} is a prerelease, promoting it to a release.")
        patch.prerelease = False
    if overwrite:
        if release.name != name:
            workflow.debug(
                f"The {tag} release already exists with a different name "
                f"{release.name} so we'll overwrite it."
            )
            patch.name = name
        if release.body != body:
            workflow.debug(
                f"The {tag} release already exists with a different body "
                f"{release.body} so we'll overwrite it."
            )
            patch.body = body
    return patch


def resolve_release(
    api: ReleaseApi,
    repo: RepoRef,
    tag: str,
    *,
    prerelease: bool,
    name: str,
    body: str,
    overwrite: bool,
    promote: bool,
) -> Release:
    """Return the release for ``tag``, creating or updating it as needed.

    At most one mutating call is made: a create when the tag has no release
    yet, or an update when the existing release needs reconciling. Running
    twice with the same inputs mutates nothing the second time.

    Raises
    ------
    RemoteError
        Raised when the lookup fails for any reason other than "not found",
        or when the create or update call fails.
    """
    workflow.debug(f"Getting release by tag {tag}.")
    lookup = api.get_release_by_tag(repo, tag)

    if lookup.status is LookupStatus.NOT_FOUND:
        workflow.debug(
            f"Release for tag {tag} doesn't exist yet so we'll create it now."
        )
        return api.create_release(
            repo, tag=tag, name=name, body=body, prerelease=prerelease
        )

    release = lookup.unwrap()
    patch = build_release_patch(
        release, name=name, body=body, overwrite=overwrite, promote=promote
    )
    if patch:
        return api.update_release(repo, release.id, patch)
    return release
