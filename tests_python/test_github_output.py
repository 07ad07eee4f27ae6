"""Tests covering workflow outputs and workflow commands."""

from __future__ import annotations

import io
from pathlib import Path

from release_test_helpers import decode_output_file

from release_upload import workflow
from release_upload.github_output import export_outputs, write_github_output


def test_write_github_output_appends_multiline_values(tmp_path: Path) -> None:
    """Values are appended with unique delimiters and sequences are joined."""
    output = tmp_path / "out" / "github_output"
    output.parent.mkdir()
    output.write_text("", encoding="utf-8")

    write_github_output(output, {"browser_download_url": "https://a"})
    write_github_output(output, {"browser_download_urls": ["https://a", "https://b"]})

    values = decode_output_file(output)
    assert values == {
        "browser_download_url": "https://a",
        "browser_download_urls": "https://a\nhttps://b",
    }


def test_export_outputs_prints_without_output_file() -> None:
    """Local runs echo outputs as ``key=value`` lines."""
    stream = io.StringIO()

    export_outputs({"browser_download_url": "https://a"}, None, stream=stream)

    assert stream.getvalue() == "browser_download_url=https://a\n"


def test_export_outputs_writes_output_file(tmp_path: Path) -> None:
    """An output path takes precedence over printing."""
    output = tmp_path / "github_output"
    stream = io.StringIO()

    export_outputs({"browser_download_url": "https://a"}, output, stream=stream)

    assert stream.getvalue() == "", "nothing should be printed"
    assert decode_output_file(output) == {"browser_download_url": "https://a"}


def test_workflow_commands_escape_messages() -> None:
    """Newlines and percent signs are escaped for the runner."""
    stream = io.StringIO()

    workflow.debug("50% done", stream=stream)
    workflow.error("line one\nline two", title="Release upload failure", stream=stream)

    assert stream.getvalue().splitlines() == [
        "::debug::50%25 done",
        "::error title=Release upload failure::line one%0Aline two",
    ]
