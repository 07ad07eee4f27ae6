"""Shared fakes and helpers for the release upload test suites."""

from __future__ import annotations

import dataclasses
import typing as typ
from pathlib import Path

from release_upload.models import Release, ReleaseAsset, ReleaseLookup

if typ.TYPE_CHECKING:
    from release_upload.errors import RemoteError
    from release_upload.models import AssetDescriptor, ReleasePatch, RepoRef

__all__ = [
    "FakeReleaseApi",
    "StubGh",
    "decode_output_file",
    "make_asset",
    "make_release",
    "write_file",
]

MUTATING_CALLS = {
    "create_release",
    "update_release",
    "delete_release_asset",
    "upload_release_asset",
}


def make_release(
    release_id: int = 1,
    *,
    tag: str = "v1.0.0",
    name: str = "v1.0.0",
    body: str = "",
    prerelease: bool = False,
) -> Release:
    """Return a release with a GitHub-style templated upload URL."""
    return Release(
        id=release_id,
        tag_name=tag,
        name=name,
        body=body,
        prerelease=prerelease,
        upload_url=(
            "https://uploads.github.com/repos/octo/demo/releases/"
            f"{release_id}/assets{{?name,label}}"
        ),
    )


def make_asset(asset_id: int, name: str) -> ReleaseAsset:
    """Return an asset whose download URL embeds its identifier."""
    return ReleaseAsset(
        id=asset_id,
        name=name,
        browser_download_url=f"https://github.com/octo/demo/releases/download/{asset_id}/{name}",
    )


def write_file(path: Path, content: bytes = b"data") -> Path:
    """Create ``path`` with ``content``, ensuring parent directories exist."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


@dataclasses.dataclass
class Call:
    """Recorded API call."""

    name: str
    arguments: dict[str, typ.Any]


class FakeReleaseApi:
    """In-memory stand-in for :class:`release_upload.api.ReleaseApi`."""

    def __init__(
        self,
        releases: typ.Iterable[Release] = (),
        assets: dict[int, list[ReleaseAsset]] | None = None,
        *,
        lookup_error: RemoteError | None = None,
        upload_errors: dict[str, RemoteError] | None = None,
    ) -> None:
        self.releases = {release.tag_name: release for release in releases}
        self.assets = {key: list(value) for key, value in (assets or {}).items()}
        self.lookup_error = lookup_error
        self.upload_errors = dict(upload_errors or {})
        self.calls: list[Call] = []
        self.uploaded: list[AssetDescriptor] = []
        self._next_id = 1000

    def _record(self, call_name: str, /, **arguments: typ.Any) -> None:
        self.calls.append(Call(call_name, arguments))

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def call_names(self) -> list[str]:
        """Return the names of every recorded call in order."""
        return [call.name for call in self.calls]

    def mutations(self) -> list[Call]:
        """Return only the calls that change state on GitHub."""
        return [call for call in self.calls if call.name in MUTATING_CALLS]

    def asset_names(self, release_id: int) -> list[str]:
        """Return the names of the assets currently on ``release_id``."""
        return [asset.name for asset in self.assets.get(release_id, [])]

    def get_release_by_tag(self, repo: RepoRef, tag: str) -> ReleaseLookup:
        self._record("get_release_by_tag", repo=repo, tag=tag)
        if self.lookup_error is not None:
            return ReleaseLookup.failed(self.lookup_error)
        if (release := self.releases.get(tag)) is None:
            return ReleaseLookup.not_found()
        return ReleaseLookup.found(release)

    def create_release(
        self, repo: RepoRef, *, tag: str, name: str, body: str, prerelease: bool
    ) -> Release:
        self._record(
            "create_release",
            repo=repo,
            tag=tag,
            name=name,
            body=body,
            prerelease=prerelease,
        )
        release = make_release(
            self._new_id(), tag=tag, name=name, body=body, prerelease=prerelease
        )
        self.releases[tag] = release
        return release

    def update_release(
        self, repo: RepoRef, release_id: int, patch: ReleasePatch
    ) -> Release:
        fields = patch.as_fields()
        self._record("update_release", repo=repo, release_id=release_id, fields=fields)
        current = next(
            release for release in self.releases.values() if release.id == release_id
        )
        updated = dataclasses.replace(current, **fields)
        self.releases[updated.tag_name] = updated
        return updated

    def list_release_assets(
        self, repo: RepoRef, release_id: int
    ) -> list[ReleaseAsset]:
        self._record("list_release_assets", repo=repo, release_id=release_id)
        return list(self.assets.get(release_id, []))

    def delete_release_asset(self, repo: RepoRef, asset_id: int) -> None:
        self._record("delete_release_asset", repo=repo, asset_id=asset_id)
        for assets in self.assets.values():
            assets[:] = [asset for asset in assets if asset.id != asset_id]

    def upload_release_asset(
        self, upload_url: str, asset: AssetDescriptor
    ) -> ReleaseAsset:
        self._record("upload_release_asset", upload_url=upload_url, name=asset.name)
        if (error := self.upload_errors.get(asset.name)) is not None:
            raise error
        self.uploaded.append(asset)
        uploaded = make_asset(self._new_id(), asset.name)
        self.assets.setdefault(asset.release_id, []).append(uploaded)
        return uploaded


@dataclasses.dataclass(frozen=True)
class Invocation:
    """Recorded ``gh`` invocation."""

    args: tuple[str, ...]
    env: dict[str, str]
    stdin: bytes | None


class _StubBoundGh:
    def __init__(
        self,
        owner: StubGh,
        args: tuple[str, ...],
        env: dict[str, str] | None = None,
        stdin: bytes | None = None,
    ) -> None:
        self._owner = owner
        self._args = args
        self._env = env or {}
        self._stdin = stdin

    def with_env(self, **env: str) -> _StubBoundGh:
        return _StubBoundGh(self._owner, self._args, self._env | env, self._stdin)

    def __lshift__(self, data: bytes) -> _StubBoundGh:
        return _StubBoundGh(self._owner, self._args, self._env, data)

    def __call__(self) -> str:
        self._owner.invocations.append(Invocation(self._args, self._env, self._stdin))
        response = self._owner.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class StubGh:
    """Minimal stand-in for ``plumbum.local["gh"]``.

    Each call consumes the next canned response; exceptions are raised.
    """

    def __init__(self, *responses: str | Exception) -> None:
        self.responses = list(responses)
        self.invocations: list[Invocation] = []

    def __getitem__(self, args: str | tuple[str, ...]) -> _StubBoundGh:
        if isinstance(args, str):
            args = (args,)
        return _StubBoundGh(self, tuple(args))


def decode_output_file(path: Path) -> dict[str, str]:
    """Parse GitHub output records written with ``write_github_output``.

    Parameters
    ----------
    path : Path
        Path to the output file containing GitHub workflow output records.

    Returns
    -------
    dict[str, str]
        Mapping of output keys to their decoded string values.
    """

    lines = path.read_text(encoding="utf-8").splitlines()
    values: dict[str, str] = {}
    index = 0
    while index < len(lines):
        key, delimiter = lines[index].split("<<", 1)
        index += 1
        buffer: list[str] = []
        while index < len(lines) and lines[index] != delimiter:
            buffer.append(lines[index])
            index += 1
        values[key] = "\n".join(buffer)
        index += 1  # Skip the delimiter terminator.
    return values
