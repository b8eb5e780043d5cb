"""
Tests for the utils module.

Tests cover:
- read_file_header: size limit, decoding and unreadable files
- paths_are_equal: spelling differences and symbolic links
- slugify_project_name
"""

import os

import pytest

from utils import paths_are_equal, read_file_header, slugify_project_name


# ============================================================================
# Tests for read_file_header
# ============================================================================


@pytest.mark.unit
def test_read_file_header_limits_size(tmp_path):
    file_path = tmp_path / "Main.mxml"
    file_path.write_text("<s:WindowedApplication>" + "x" * 100, encoding="utf-8")

    assert read_file_header(file_path, 22) == "<s:WindowedApplication"


@pytest.mark.unit
def test_read_file_header_short_file(tmp_path):
    file_path = tmp_path / "Main.mxml"
    file_path.write_text("<s:Group/>", encoding="utf-8")

    assert read_file_header(file_path, 1024) == "<s:Group/>"


@pytest.mark.unit
def test_read_file_header_drops_cut_characters(tmp_path):
    """A multi-byte character split by the size limit is dropped."""
    file_path = tmp_path / "Main.mxml"
    file_path.write_text("abé", encoding="utf-8")

    assert read_file_header(file_path, 3) == "ab"


@pytest.mark.unit
def test_read_file_header_missing_file(tmp_path):
    assert read_file_header(tmp_path / "missing.mxml", 1024) == ""


# ============================================================================
# Tests for paths_are_equal
# ============================================================================


@pytest.mark.unit
def test_paths_are_equal_different_spellings(tmp_path):
    (tmp_path / "LibA").mkdir()
    assert paths_are_equal(tmp_path / "LibA", f"{tmp_path}/x/../LibA")


@pytest.mark.unit
def test_paths_are_equal_different_paths(tmp_path):
    assert not paths_are_equal(tmp_path / "LibA", tmp_path / "LibB")


@pytest.mark.unit
@pytest.mark.skipif(os.name != "posix", reason="symlinks need POSIX")
def test_paths_are_equal_follows_symlinks(tmp_path):
    target = tmp_path / "LibA"
    target.mkdir()
    link = tmp_path / "Alias"
    link.symlink_to(target)

    assert paths_are_equal(link, target)


# ============================================================================
# Tests for slugify_project_name
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "name,expected",
    [
        ("LibA", "liba"),
        ("My Lib!2", "my_lib_2"),
        ("core--utils", "core_utils"),
        ("  Spaced  ", "spaced"),
        ("App1", "app1"),
    ],
)
def test_slugify_project_name(name, expected):
    assert slugify_project_name(name) == expected


@pytest.mark.unit
def test_slugify_project_name_custom_separator():
    assert slugify_project_name("My Lib", separator="-") == "my-lib"
