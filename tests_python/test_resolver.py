"""Tests for release lookup, creation and reconciliation."""

from __future__ import annotations

import pytest
from release_test_helpers import FakeReleaseApi, make_release

from release_upload.errors import RemoteError
from release_upload.models import ReleasePatch, RepoRef
from release_upload.resolver import build_release_patch, resolve_release


def _resolve(api: FakeReleaseApi, repo: RepoRef, **overrides: object):
    options: dict[str, object] = {
        "prerelease": False,
        "name": "v1.0.0",
        "body": "",
        "overwrite": False,
        "promote": False,
    }
    options.update(overrides)
    return resolve_release(api, repo, "v1.0.0", **options)  # type: ignore[arg-type]


class TestBuildReleasePatch:
    """Unit tests for :func:`build_release_patch`."""

    def test_promote_clears_prerelease(self) -> None:
        """Promotion only touches the prerelease flag."""
        release = make_release(prerelease=True, body="old")
        patch = build_release_patch(
            release, name="other", body="new", overwrite=False, promote=True
        )
        assert patch.as_fields() == {"prerelease": False}

    def test_promote_never_marks_prerelease(self) -> None:
        """A full release is never turned back into a prerelease."""
        release = make_release(prerelease=False)
        patch = build_release_patch(
            release, name=release.name, body="", overwrite=False, promote=True
        )
        assert not patch, "no change expected for a full release"

    def test_overwrite_only_sends_changed_fields(self) -> None:
        """Unchanged name is left out while the differing body is sent."""
        release = make_release(name="v1.0.0", body="old")
        patch = build_release_patch(
            release, name="v1.0.0", body="new", overwrite=True, promote=False
        )
        assert patch.as_fields() == {"body": "new"}

    def test_differences_ignored_without_overwrite(self) -> None:
        """Name and body drift is tolerated when overwrite is off."""
        release = make_release(name="old", body="old")
        patch = build_release_patch(
            release, name="new", body="new", overwrite=False, promote=False
        )
        assert patch == ReleasePatch(), "patch should be empty"


def test_missing_release_is_created(fake_api: FakeReleaseApi, repo: RepoRef) -> None:
    """A not-found lookup creates the release with the desired metadata."""
    release = _resolve(
        fake_api, repo, prerelease=True, name="First", body="Notes", overwrite=True
    )

    assert fake_api.call_names() == ["get_release_by_tag", "create_release"]
    created = fake_api.calls[1].arguments
    assert created["tag"] == "v1.0.0", "release should use the tag"
    assert created["prerelease"] is True, "prerelease flag should be forwarded"
    assert (created["name"], created["body"]) == ("First", "Notes")
    assert release.tag_name == "v1.0.0", "created release should be returned"


def test_matching_release_is_returned_untouched(repo: RepoRef) -> None:
    """No mutation happens when the release already matches."""
    existing = make_release(name="v1.0.0", body="")
    api = FakeReleaseApi([existing])

    release = _resolve(api, repo, overwrite=True, promote=True)

    assert release is existing, "looked-up release should be returned as is"
    assert api.mutations() == [], "no create or update expected"


def test_overwrite_is_idempotent(repo: RepoRef) -> None:
    """The first run updates the release, the second run changes nothing."""
    api = FakeReleaseApi([make_release(name="old", body="old")])

    first = _resolve(api, repo, name="New", body="Body", overwrite=True)
    second = _resolve(api, repo, name="New", body="Body", overwrite=True)

    updates = [call for call in api.calls if call.name == "update_release"]
    assert len(updates) == 1, "exactly one update expected across both runs"
    assert updates[0].arguments["fields"] == {"name": "New", "body": "Body"}
    assert (first.name, first.body) == ("New", "Body")
    assert second == first, "second run should see the updated release"


def test_promotion_with_differing_body_only_sends_prerelease(
    repo: RepoRef,
) -> None:
    """Promotion without overwrite leaves name and body alone."""
    api = FakeReleaseApi([make_release(prerelease=True, body="old body")])

    release = _resolve(api, repo, body="new body", promote=True)

    mutations = api.mutations()
    assert [call.name for call in mutations] == ["update_release"]
    assert mutations[0].arguments["fields"] == {"prerelease": False}
    assert release.prerelease is False, "release should now be a full release"
    assert release.body == "old body", "body must be untouched"


def test_lookup_failure_propagates(repo: RepoRef) -> None:
    """Failures other than not-found are raised unchanged."""
    error = RemoteError("Bad credentials (HTTP 401)", status=401)
    api = FakeReleaseApi(lookup_error=error)

    with pytest.raises(RemoteError) as exc:
        _resolve(api, repo)

    assert exc.value is error, "the original error should propagate"
    assert api.mutations() == [], "nothing should be created after a failure"


def test_resolver_reports_decisions(
    repo: RepoRef, capsys: pytest.CaptureFixture[str]
) -> None:
    """Each decision is logged as a debug workflow command."""
    api = FakeReleaseApi([make_release(prerelease=True)])

    _resolve(api, repo, promote=True)

    stderr = capsys.readouterr().err
    assert "::debug::Getting release by tag v1.0.0." in stderr
    assert "promoting it to a release" in stderr
