"""Shared fixtures for the release upload test suite."""

from __future__ import annotations

from pathlib import Path

import pytest
from release_test_helpers import FakeReleaseApi

from release_upload.models import RepoRef


@pytest.fixture
def repo() -> RepoRef:
    """Repository targeted by the tests."""
    return RepoRef("octo", "demo")


@pytest.fixture
def fake_api() -> FakeReleaseApi:
    """Release API without any release or asset."""
    return FakeReleaseApi()


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create an isolated workspace and make it the working directory."""
    root = tmp_path / "workspace"
    root.mkdir()
    monkeypatch.chdir(root)
    return root
