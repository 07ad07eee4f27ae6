"""GitHub release API implemented on top of ``gh api``.

The token is only exported to the ``gh`` child process as ``GH_TOKEN``; it
never appears on the command line.

Examples
--------
>>> api = GhReleaseApi(token="ghp_example")  # doctest: +SKIP
>>> api.get_release_by_tag(RepoRef("octo", "demo"), "v1.0.0")  # doctest: +SKIP
ReleaseLookup(status=<LookupStatus.FOUND: 'found'>, ...)
"""

from __future__ import annotations

import json
import re
import typing as typ
from urllib.parse import quote

from plumbum import local
from plumbum.commands import CommandNotFound, ProcessExecutionError

from .errors import RemoteError
from .models import Release, ReleaseAsset, ReleaseLookup

if typ.TYPE_CHECKING:
    from plumbum.commands.base import BaseCommand

    from .models import AssetDescriptor, ReleasePatch, RepoRef

__all__ = ["ASSET_CONTENT_TYPE", "GhReleaseApi", "split_json_documents"]

ASSET_CONTENT_TYPE = "binary/octet-stream"
_HTTP_STATUS = re.compile(r"\(HTTP (\d{3})\)")
_UPLOAD_TEMPLATE = re.compile(r"\{[^}]*\}$")


def split_json_documents(text: str) -> list[typ.Any]:
    """Decode JSON documents printed back to back.

    ``gh api --paginate`` writes one array per page without a separator.

    Examples
    --------
    >>> split_json_documents('[1, 2][3]')
    [[1, 2], [3]]
    """
    decoder = json.JSONDecoder()
    documents: list[typ.Any] = []
    index = 0
    while True:
        while index < len(text) and text[index].isspace():
            index += 1
        if index >= len(text):
            return documents
        document, index = decoder.raw_decode(text, index)
        documents.append(document)


def _remote_error(exc: ProcessExecutionError) -> RemoteError:
    stderr = (exc.stderr or "").strip()
    status = int(match.group(1)) if (match := _HTTP_STATUS.search(stderr)) else None
    message = stderr.removeprefix("gh: ") or f"gh exited with status {exc.retcode}"
    return RemoteError(message, status=status)


def _field_args(fields: typ.Mapping[str, bool | str]) -> list[str]:
    """Return ``gh api`` field flags; booleans need ``-F`` to keep their type."""
    args: list[str] = []
    for key, value in fields.items():
        if isinstance(value, bool):
            args.extend(["-F", f"{key}={'true' if value else 'false'}"])
        else:
            args.extend(["-f", f"{key}={value}"])
    return args


class GhReleaseApi:
    """:class:`~release_upload.api.ReleaseApi` backed by the GitHub CLI.

    Parameters
    ----------
    token : str
        Token exported to ``gh`` as ``GH_TOKEN``.
    gh : BaseCommand | None, optional
        ``gh`` command to invoke; looked up on ``PATH`` when omitted.
    """

    def __init__(self, token: str, *, gh: BaseCommand | None = None) -> None:
        self._token = token
        self._gh = gh

    def _command(self) -> BaseCommand:
        if self._gh is None:
            try:
                self._gh = local["gh"]
            except CommandNotFound as exc:
                message = "The GitHub CLI 'gh' is required but was not found on PATH"
                raise RemoteError(message) from exc
        return self._gh

    def _api(self, *args: str, stdin: bytes | None = None) -> str:
        command = self._command()["api", *args].with_env(GH_TOKEN=self._token)
        if stdin is not None:
            command = command << stdin
        try:
            return command()
        except ProcessExecutionError as exc:
            raise _remote_error(exc) from exc

    def _json(self, *args: str, stdin: bytes | None = None) -> typ.Any:
        return json.loads(self._api(*args, stdin=stdin))

    def get_release_by_tag(self, repo: RepoRef, tag: str) -> ReleaseLookup:
        """Look up the release for ``tag``; HTTP 404 maps to ``not_found``."""
        endpoint = f"repos/{repo}/releases/tags/{quote(tag, safe='')}"
        try:
            payload = self._json(endpoint)
        except RemoteError as exc:
            if exc.status == 404:
                return ReleaseLookup.not_found()
            return ReleaseLookup.failed(exc)
        return ReleaseLookup.found(Release.from_payload(payload))

    def create_release(
        self, repo: RepoRef, *, tag: str, name: str, body: str, prerelease: bool
    ) -> Release:
        fields = {"tag_name": tag, "name": name, "body": body, "prerelease": prerelease}
        payload = self._json(
            "--method", "POST", f"repos/{repo}/releases", *_field_args(fields)
        )
        return Release.from_payload(payload)

    def update_release(
        self, repo: RepoRef, release_id: int, patch: ReleasePatch
    ) -> Release:
        payload = self._json(
            "--method",
            "PATCH",
            f"repos/{repo}/releases/{release_id}",
            *_field_args(patch.as_fields()),
        )
        return Release.from_payload(payload)

    def list_release_assets(
        self, repo: RepoRef, release_id: int
    ) -> list[ReleaseAsset]:
        output = self._api(
            "--paginate", f"repos/{repo}/releases/{release_id}/assets?per_page=100"
        )
        return [
            ReleaseAsset.from_payload(item)
            for page in split_json_documents(output)
            for item in page
        ]

    def delete_release_asset(self, repo: RepoRef, asset_id: int) -> None:
        self._api("--method", "DELETE", f"repos/{repo}/releases/assets/{asset_id}")

    def upload_release_asset(
        self, upload_url: str, asset: AssetDescriptor
    ) -> ReleaseAsset:
        """POST ``asset`` to the release upload endpoint.

        ``upload_url`` may still carry GitHub's ``{?name,label}`` template.
        """
        url = f"{_UPLOAD_TEMPLATE.sub('', upload_url)}?name={quote(asset.name, safe='')}"
        payload = self._json(
            "--method",
            "POST",
            "-H",
            f"Content-Type: {ASSET_CONTENT_TYPE}",
            "-H",
            f"Content-Length: {asset.size}",
            "--input",
            "-",
            url,
            stdin=asset.content,
        )
        return ReleaseAsset.from_payload(payload)
