#!/usr/bin/env -S uv run --script
# fmt: off
# /// script
# requires-python = ">=3.11"
# dependencies = [
#   "cyclopts>=3.24,<4.0",
#   "plumbum>=1.8,<2.0",
# ]
# ///
# fmt: on

"""Upload files to a GitHub release, creating the release when needed.

Every option can also be supplied as an ``INPUT_*`` environment variable,
which is how the composite action forwards its inputs.

Examples
--------
Upload a single archive to the ``v1.2.3`` release::

    INPUT_REPO_TOKEN="$GITHUB_TOKEN" uv run scripts/upload_to_release.py \
        --file dist/app.tar.gz --tag refs/tags/v1.2.3 --asset-name 'app-$tag.tar.gz'

Upload every archive matched by a glob, replacing existing assets::

    uv run scripts/upload_to_release.py --repo-token "$GITHUB_TOKEN" \
        --file 'dist/*.tar.gz' --file-glob true --overwrite true --tag v1.2.3
"""

from __future__ import annotations

import os
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App
from release_upload import (
    GhReleaseApi,
    ReleaseUploadError,
    RunReport,
    build_config,
    export_outputs,
    publish,
    workflow,
)
from release_upload.environment import optional_env_path

if typ.TYPE_CHECKING:
    from release_upload.api import ReleaseApi

app: App = App(
    help="Upload files to a GitHub release, creating the release when needed.",
    config=cyclopts.config.Env("INPUT_", command=False),
)


def main(
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
    environ: typ.Mapping[str, str] | None = None,
    api: ReleaseApi | None = None,
    root: Path | None = None,
) -> int:
    """Entry point shared by the CLI and tests.

    Parameters
    ----------
    repo_token, file, tag, file_glob, overwrite, promote, prerelease
        Raw action inputs, passed to
        :func:`release_upload.config.build_config` with the remaining
        ``release_name``, ``body``, ``asset_name`` and ``repo_name`` inputs.
    environ
        Environment providing ``GITHUB_REPOSITORY`` and ``GITHUB_OUTPUT``;
        defaults to :data:`os.environ`.
    api
        Release API client; a :class:`GhReleaseApi` using ``repo_token`` when
        omitted.
    root
        Directory relative file paths are resolved against.

    Returns
    -------
    int
        Exit code: ``0`` when every file was published, ``1`` when an input
        or API error stopped the run or a duplicate asset was rejected.
    """
    env = os.environ if environ is None else environ
    report = RunReport()
    try:
        config = build_config(
            repo_token=repo_token,
            file=file,
            tag=tag,
            file_glob=file_glob,
            overwrite=overwrite,
            promote=promote,
            prerelease=prerelease,
            release_name=release_name,
            body=body,
            asset_name=asset_name,
            repo_name=repo_name,
            environ=env,
        )
        publish(
            config, api or GhReleaseApi(config.token), root=root, report=report
        )
    except ReleaseUploadError as exc:
        workflow.error(str(exc), title="Release upload failure")
        return 1
    finally:
        # Files uploaded before a failure still surface their URLs.
        if outputs := report.outputs():
            export_outputs(outputs, optional_env_path(env, "GITHUB_OUTPUT"))
    return 1 if report.failed else 0


@app.default
def cli(
    *,
    repo_token: str = "",
    file: str = "",
    tag: str = "",
    file_glob: str = "",
    overwrite: str = "",
    promote: str = "",
    prerelease: str = "",
    release_name: str = "",
    body: str = "",
    asset_name: str = "",
    repo_name: str = "",
) -> None:
    """Upload files to a GitHub release.

    Parameters
    ----------
    repo_token
        Token used to authenticate against the GitHub API.
    file
        File to upload, or a glob pattern with ``--file-glob``.
    tag
        Tag of the release; ``refs/tags/`` and ``refs/heads/`` are stripped.
    file_glob
        Treat ``file`` as a glob pattern (``true``/``false``, as for every
        flag below; empty means ``false``).
    overwrite
        Replace existing assets and overwrite release name and body.
    promote
        Promote an existing prerelease to a full release.
    prerelease
        Create the release as a prerelease.
    release_name
        Display name of the release.
    body
        Description of the release.
    asset_name
        Asset name for a single file; ``$tag`` is replaced by the tag.
    repo_name
        Target repository as ``owner/name``; defaults to the current one.
    """
    exit_code = main(
        repo_token=repo_token,
        file=file,
        tag=tag,
        file_glob=file_glob,
        overwrite=overwrite,
        promote=promote,
        prerelease=prerelease,
        release_name=release_name,
        body=body,
        asset_name=asset_name,
        repo_name=repo_name,
    )
    raise SystemExit(exit_code)


if __name__ == "__main__":
    app()
