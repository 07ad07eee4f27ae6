"""Input normalisation for the release upload helper.

GitHub Actions hands every input over as a string. :func:`build_config`
turns those raw values into a frozen :class:`UploadConfig` that the rest of
the helper consumes, so nothing downstream reads the environment directly.

Usage
-----
Build a configuration the way the CLI does::

    import os

    from release_upload.config import build_config

    config = build_config(
        repo_token=os.environ["GITHUB_TOKEN"],
        file="dist/*.tar.gz",
        tag="refs/tags/v1.2.3",
        file_glob="true",
        environ=os.environ,
    )
    print(config.tag)  # v1.2.3
"""

from __future__ import annotations

import dataclasses
import typing as typ

from .environment import ambient_repository
from .errors import InputError
from .models import RepoRef

__all__ = [
    "TAG_TOKEN",
    "UploadConfig",
    "build_config",
    "coerce_bool",
    "normalise_tag",
    "parse_repo_name",
    "render_asset_name",
]

TAG_TOKEN = "$tag"
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclasses.dataclass(slots=True, frozen=True)
class UploadConfig:
    """Normalised inputs for one run.

    Attributes
    ----------
    token : str
        Token used to authenticate against the GitHub API.
    repo : RepoRef
        Repository owning the release.
    file : str
        Path to upload, or glob pattern when :attr:`file_glob` is set.
    tag : str
        Release tag with any ``refs/tags/`` or ``refs/heads/`` prefix removed.
    file_glob : bool
        Treat :attr:`file` as a glob pattern.
    overwrite : bool
        Replace existing assets and reconcile release name and body.
    promote : bool
        Turn an existing prerelease into a full release.
    prerelease : bool
        Mark newly created releases as prereleases.
    release_name : str
        Display name for the release.
    body : str
        Release description.
    asset_name : str | None
        Explicit asset name with ``$tag`` already substituted.
    """

    token: str
    repo: RepoRef
    file: str
    tag: str
    file_glob: bool = False
    overwrite: bool = False
    promote: bool = False
    prerelease: bool = False
    release_name: str = ""
    body: str = ""
    asset_name: str | None = None


def coerce_bool(value: object, *, default: bool = False) -> bool:
    """Interpret GitHub input values as booleans.

    ``None`` or empty strings fall back to ``default``.

    Examples
    --------
    >>> coerce_bool("True")
    True
    >>> coerce_bool("", default=True)
    True
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalised = value.strip().lower()
        if not normalised:
            return default
        if normalised in _TRUTHY:
            return True
        if normalised in _FALSY:
            return False
    message = f"Cannot interpret {value!r} as a boolean"
    raise InputError(message)


def normalise_tag(tag: str) -> str:
    """Strip the git ref prefix from ``tag``.

    Examples
    --------
    >>> normalise_tag("refs/tags/v1.2.3")
    'v1.2.3'
    >>> normalise_tag("refs/heads/release")
    'release'
    """
    for prefix in ("refs/tags/", "refs/heads/"):
        tag = tag.removeprefix(prefix)
    return tag


def parse_repo_name(repo_name: str) -> RepoRef:
    """Split an ``owner/name`` string into a :class:`RepoRef`.

    Everything after the first ``/`` belongs to the repository name.

    Raises
    ------
    InputError
        Raised when the owner or the repository part is empty.
    """
    owner, separator, name = repo_name.partition("/")
    if not owner or not separator:
        message = f"Could not extract 'owner' from 'repo_name': {repo_name}."
        raise InputError(message)
    if not name:
        message = f"Could not extract 'repo' from 'repo_name': {repo_name}."
        raise InputError(message)
    return RepoRef(owner=owner, name=name)


def render_asset_name(template: str, tag: str) -> str:
    """Replace every ``$tag`` token in ``template`` with ``tag``.

    Examples
    --------
    >>> render_asset_name("build-$tag.tar.gz", "v2.0.0")
    'build-v2.0.0.tar.gz'
    """
    return template.replace(TAG_TOKEN, tag)


def _require(label: str, value: str | None) -> str:
    if not value:
        message = f"Input required and not supplied: {label}"
        raise InputError(message)
    return value


def build_config(
    *,
    repo_token: str | None,
    file: str | None,
    tag: str | None,
    file_glob: bool | str | None = None,
    overwrite: bool | str | None = None,
    promote: bool | str | None = None,
    prerelease: bool | str | None = None,
    release_name: str | None = None,
    body: str | None = None,
    asset_name: str | None = None,
    repo_name: str | None = None,
    environ: typ.Mapping[str, str],
) -> UploadConfig:
    """Validate raw inputs and return the run configuration.

    Parameters
    ----------
    repo_token, file, tag:
        Required inputs; empty values raise :class:`InputError`.
    file_glob, overwrite, promote, prerelease:
        Boolean inputs, either real booleans or GitHub input strings.
    release_name, body:
        Desired release metadata; missing values become empty strings.
    asset_name:
        Optional asset name template supporting the ``$tag`` token.
    repo_name:
        Optional ``owner/name`` override for the target repository.
    environ:
        Environment consulted for ``GITHUB_REPOSITORY`` when ``repo_name``
        is empty.

    Returns
    -------
    UploadConfig
        Frozen configuration shared by the resolver and the uploader.

    Raises
    ------
    InputError
        Raised for missing required inputs, unreadable booleans or a
        malformed repository name.
    """
    token = _require("repo_token", repo_token)
    source = _require("file", file)
    resolved_tag = normalise_tag(_require("tag", tag))
    repo = parse_repo_name(repo_name or ambient_repository(environ))

    return UploadConfig(
        token=token,
        repo=repo,
        file=source,
        tag=resolved_tag,
        file_glob=coerce_bool(file_glob),
        overwrite=coerce_bool(overwrite),
        promote=coerce_bool(promote),
        prerelease=coerce_bool(prerelease),
        release_name=release_name or "",
        body=body or "",
        asset_name=render_asset_name(asset_name, resolved_tag) if asset_name else None,
    )
