"""
Tests for the file_io module.

Tests cover:
- FilesystemFileReader: sources, archives, folders, undecodable bytes, read failures
- WorkspaceFile: write validation, JSON output, discarding present and absent files
- MockFileReader: fixed and computed content
"""

import json
import os
from pathlib import Path

import pytest

from core.exceptions import (
    FileDiscardError,
    FileReadError,
    FileWriteError,
    InvalidFilePathError,
)
from core.file_io import BINARY_SNIFF_SIZE, FilesystemFileReader, MockFileReader, WorkspaceFile


# ============================================================================
# Tests for FilesystemFileReader
# ============================================================================


@pytest.mark.unit
def test_reader_returns_source_text(tmp_path):
    source = tmp_path / "Button.as"
    source.write_text("package com.acme {\n    import flash.events.Event;\n}\n", encoding="utf-8")

    assert "import flash.events.Event;" in FilesystemFileReader().read_file(source)


@pytest.mark.unit
@pytest.mark.parametrize("name", ["Missing.as", ""])
def test_reader_missing_file_or_folder_is_empty(tmp_path, name):
    assert FilesystemFileReader().read_file(tmp_path / name) == ""


@pytest.mark.unit
def test_reader_skips_compiled_archive(tmp_path):
    """A .swc is a zip; its NUL bytes mark it as binary."""
    archive = tmp_path / "liba.swc"
    archive.write_bytes(b"PK\x03\x04\x00\x00catalog.xml")

    assert FilesystemFileReader().read_file(archive) == ""


@pytest.mark.unit
def test_reader_only_sniffs_leading_bytes(tmp_path):
    source = tmp_path / "Long.mxml"
    source.write_bytes(b"A" * BINARY_SNIFF_SIZE + b"\x00")

    assert FilesystemFileReader().read_file(source).startswith("AAA")


@pytest.mark.unit
def test_reader_drops_invalid_utf8(tmp_path):
    source = tmp_path / "Legacy.as"
    source.write_bytes(b"import com.a.X;\xff\xfe")

    assert FilesystemFileReader().read_file(source) == "import com.a.X;"


@pytest.mark.unit
@pytest.mark.mock
def test_reader_wraps_os_errors(tmp_path, mocker):
    source = tmp_path / "Button.as"
    source.write_text("content", encoding="utf-8")
    mocker.patch("pathlib.Path.read_bytes", side_effect=OSError("Permission denied"))

    with pytest.raises(FileReadError) as exc_info:
        FilesystemFileReader().read_file(source)

    assert exc_info.value.file_path == str(source)
    assert isinstance(exc_info.value.original_exception, OSError)


# ============================================================================
# Tests for WorkspaceFile.for_writing / write_json
# ============================================================================


@pytest.mark.unit
def test_for_writing_rejects_missing_folder(tmp_path):
    cache = tmp_path / "gone" / ".sirius_index.json"

    with pytest.raises(InvalidFilePathError) as exc_info:
        WorkspaceFile.for_writing(cache)

    assert "Parent directory does not exist" in exc_info.value.message
    assert exc_info.value.file_path == str(cache)


@pytest.mark.unit
@pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="needs POSIX permissions")
def test_for_writing_rejects_read_only_folder(tmp_path):
    tmp_path.chmod(0o555)
    try:
        with pytest.raises(InvalidFilePathError) as exc_info:
            WorkspaceFile.for_writing(tmp_path / ".sirius_index.json")
    finally:
        tmp_path.chmod(0o755)

    assert "not writable" in exc_info.value.message


@pytest.mark.unit
def test_write_json_replaces_previous_content(tmp_path):
    """Output is indented, ends with a newline and fully overwrites the file."""
    cache = WorkspaceFile.for_writing(tmp_path / "index.json")

    cache.write_json([{"artifact_path": "/ws/a.swc", "qualified_classes": ["com.a.X"]}])
    cache.write_json([{"artifact_path": "/ws/b.swc"}])

    content = (tmp_path / "index.json").read_text(encoding="utf-8")
    assert content == '[\n  {\n    "artifact_path": "/ws/b.swc"\n  }\n]\n'
    assert json.loads(content) == [{"artifact_path": "/ws/b.swc"}]


@pytest.mark.unit
def test_write_json_keeps_non_ascii_paths(tmp_path):
    WorkspaceFile.for_writing(tmp_path / "index.json").write_json(["/ws/Bibliothèque/bin/lib.swc"])

    assert "Bibliothèque" in (tmp_path / "index.json").read_text(encoding="utf-8")


@pytest.mark.unit
@pytest.mark.mock
def test_write_json_wraps_os_errors(tmp_path, mocker):
    cache = WorkspaceFile.for_writing(tmp_path / "index.json")
    mocker.patch("pathlib.Path.write_text", side_effect=OSError("Disk full"))

    with pytest.raises(FileWriteError) as exc_info:
        cache.write_json([])

    assert exc_info.value.diagnostic_info["type"] == "OSError"


# ============================================================================
# Tests for WorkspaceFile.discard
# ============================================================================


@pytest.mark.unit
def test_discard_deletes_existing_file(tmp_path):
    artifact = tmp_path / "liba.swc"
    artifact.write_bytes(b"PK")

    assert WorkspaceFile(artifact).discard() is True
    assert not artifact.exists()


@pytest.mark.unit
def test_discard_absent_file_is_not_an_error(tmp_path):
    assert WorkspaceFile(tmp_path / "liba.swc").discard() is False


@pytest.mark.unit
@pytest.mark.mock
def test_discard_wraps_other_os_errors(tmp_path, mocker):
    artifact = tmp_path / "liba.swc"
    artifact.write_bytes(b"PK")
    mocker.patch("pathlib.Path.unlink", side_effect=PermissionError("locked"))

    with pytest.raises(FileDiscardError) as exc_info:
        WorkspaceFile(artifact).discard()

    assert "Failed to discard file" in exc_info.value.message
    assert exc_info.value.file_path == str(artifact)


# ============================================================================
# Tests for MockFileReader
# ============================================================================


@pytest.mark.unit
def test_mock_reader_fixed_content():
    reader = MockFileReader("import com.a.X;")

    assert reader.read_file(Path("a.as")) == "import com.a.X;"
    assert reader.read_file(Path("b.mxml")) == "import com.a.X;"
    assert reader.calls == [Path("a.as"), Path("b.mxml")]


@pytest.mark.unit
def test_mock_reader_computed_content():
    reader = MockFileReader(lambda p: f"import {p.stem};")

    assert reader.read_file(Path("com/a/X.as")) == "import X;"
    assert MockFileReader().read_file(Path("a.as")) == ""
