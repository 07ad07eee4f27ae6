"""Tests for input normalisation in :mod:`release_upload.config`."""

from __future__ import annotations

import pytest

from release_upload.config import (
    build_config,
    coerce_bool,
    normalise_tag,
    parse_repo_name,
    render_asset_name,
)
from release_upload.errors import InputError
from release_upload.models import RepoRef

ENVIRON = {"GITHUB_REPOSITORY": "octo/demo"}


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("refs/tags/v1.2.3", "v1.2.3"),
        ("refs/heads/release", "release"),
        ("v1.2.3", "v1.2.3"),
        ("feature/refs/tags/x", "feature/refs/tags/x"),
    ],
)
def test_normalise_tag_strips_ref_prefixes(raw: str, expected: str) -> None:
    """Only a leading tag or branch ref prefix is removed."""
    assert normalise_tag(raw) == expected, f"unexpected tag for {raw!r}"


def test_render_asset_name_substitutes_every_tag_token() -> None:
    """Each ``$tag`` occurrence is replaced by the resolved tag."""
    assert render_asset_name("build-$tag.tar.gz", "v2.0.0") == "build-v2.0.0.tar.gz"
    assert (
        render_asset_name("$tag/app-$tag", "v1") == "v1/app-v1"
    ), "all tokens should be replaced"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (True, True),
        (False, False),
        (None, False),
        ("true", True),
        ("FALSE", False),
        ("YES", True),
        ("no", False),
        ("1", True),
        ("0", False),
        (" on ", True),
        (" off ", False),
        ("", False),
    ],
)
def test_coerce_bool_handles_common_inputs(value: object, expected: bool) -> None:
    """The coercion helper accepts boolean strings in various casings."""
    assert coerce_bool(value) is expected


def test_coerce_bool_uses_default_for_empty_values() -> None:
    """Empty and missing inputs fall back to the default."""
    assert coerce_bool("", default=True) is True
    assert coerce_bool(None, default=True) is True


def test_coerce_bool_rejects_unknown_input() -> None:
    """Unexpected values surface a descriptive error."""
    with pytest.raises(InputError, match="Cannot interpret 'maybe'"):
        coerce_bool("maybe")


def test_parse_repo_name_splits_on_first_slash() -> None:
    """The owner is everything before the first slash."""
    assert parse_repo_name("octo/demo") == RepoRef("octo", "demo")
    assert parse_repo_name("octo/demo/extra") == RepoRef(
        "octo", "demo/extra"
    ), "the remainder belongs to the repository name"


@pytest.mark.parametrize(
    ("value", "missing"),
    [("demo", "owner"), ("/demo", "owner"), ("octo/", "repo")],
)
def test_parse_repo_name_rejects_malformed_values(value: str, missing: str) -> None:
    """Malformed overrides name the part that could not be extracted."""
    with pytest.raises(InputError, match=f"Could not extract '{missing}'"):
        parse_repo_name(value)


def test_build_config_normalises_inputs() -> None:
    """Raw action inputs become a typed configuration."""
    config = build_config(
        repo_token="secret",
        file="dist/app.bin",
        tag="refs/tags/v2.0.0",
        overwrite="true",
        promote=True,
        asset_name="app-$tag.bin",
        environ=ENVIRON,
    )

    assert config.tag == "v2.0.0", "tag prefix should be stripped"
    assert config.repo == RepoRef("octo", "demo"), "ambient repository expected"
    assert config.overwrite is True, "string booleans should be coerced"
    assert config.promote is True, "real booleans should pass through"
    assert config.file_glob is False, "missing flags default to false"
    assert config.asset_name == "app-v2.0.0.bin", "asset name should be rendered"
    assert config.release_name == "", "missing release name becomes empty"
    assert config.body == "", "missing body becomes empty"


def test_build_config_prefers_repo_name_override() -> None:
    """An explicit repository wins over ``GITHUB_REPOSITORY``."""
    config = build_config(
        repo_token="secret",
        file="app.bin",
        tag="v1",
        repo_name="other/project",
        environ=ENVIRON,
    )
    assert config.repo == RepoRef("other", "project")


def test_build_config_leaves_asset_name_unset_when_empty() -> None:
    """An empty asset name falls back to the file name later on."""
    config = build_config(
        repo_token="secret", file="app.bin", tag="v1", asset_name="", environ=ENVIRON
    )
    assert config.asset_name is None


@pytest.mark.parametrize("missing", ["repo_token", "file", "tag"])
def test_build_config_requires_inputs(missing: str) -> None:
    """Missing required inputs raise an input error naming them."""
    inputs = {"repo_token": "secret", "file": "app.bin", "tag": "v1"}
    inputs[missing] = ""
    with pytest.raises(InputError, match=f"Input required and not supplied: {missing}"):
        build_config(**inputs, environ=ENVIRON)


def test_build_config_requires_a_repository() -> None:
    """Without an override or ``GITHUB_REPOSITORY`` the run cannot proceed."""
    with pytest.raises(InputError, match="GITHUB_REPOSITORY"):
        build_config(repo_token="secret", file="app.bin", tag="v1", environ={})
