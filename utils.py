"""
General utility functions shared by the resolver and the CLI.
"""

import os
import re
from pathlib import Path

from constants import ARTIFACT_NAME_SEPARATOR

_NON_ALPHANUMERIC_RUN = re.compile(r"[^a-z0-9]+")


def read_file_header(file_path: Path, header_size: int, encoding: str = "utf-8") -> str:
    """
    Read a specified number of bytes from the beginning of a file.

    Args:
        file_path: The path to the file.
        header_size: The maximum number of bytes to read.
        encoding: The encoding used to decode the bytes. Undecodable bytes
            (e.g. a multi-byte character cut in half) are dropped.

    Returns:
        str: The decoded header, or an empty string if the file cannot be read.
    """
    try:
        with open(file_path, "rb") as f:
            chunk = f.read(header_size)
    except OSError:
        return ""
    return chunk.decode(encoding, errors="ignore")


def paths_are_equal(path1: Path | str, path2: Path | str) -> bool:
    """
    Test whether two paths designate the same location even if spelled differently.

    Symbolic links are resolved before comparing, and the comparison is
    case-insensitive on platforms whose filesystems are (as reported by
    `os.path.normcase`).

    Returns:
        bool: True if both paths resolve to the same location.
    """
    try:
        resolved1 = os.path.normcase(str(Path(path1).resolve()))
        resolved2 = os.path.normcase(str(Path(path2).resolve()))
    except (OSError, RuntimeError):
        return False
    return resolved1 == resolved2


def slugify_project_name(name: str, separator: str = ARTIFACT_NAME_SEPARATOR) -> str:
    """
    Derive an artifact base name from a project folder name.

    The name is lower-cased and every run of non-alphanumeric characters is
    collapsed into a single separator; separators are never leading or trailing.

    Examples:
        "LibA" -> "liba", "My Lib!2" -> "my_lib_2"
    """
    return _NON_ALPHANUMERIC_RUN.sub(separator, name.lower()).strip(separator)
