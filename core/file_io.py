"""
Reading source files and managing the files the resolver owns.

Sources are read leniently: anything that looks binary reads as empty text
and undecodable bytes are dropped. The resolver itself only ever writes one
kind of file (the JSON index cache) and only ever deletes two kinds (the
cache and built artifacts), which is all WorkspaceFile offers.
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, Protocol

from core.exceptions import (
    FileDiscardError,
    FileReadError,
    FileWriteError,
    InvalidFilePathError,
)

# A NUL byte within this many leading bytes marks a file as binary.
BINARY_SNIFF_SIZE = 1024


class FileReader(Protocol):
    """Source of file text, swapped for a mock in tests."""

    def read_file(self, file_path: Path) -> str:
        """Text of `file_path`, or "" when it is not a regular text file."""


class FilesystemFileReader:
    def read_file(self, file_path: Path) -> str:
        """
        Decode a file as UTF-8, dropping invalid sequences.

        Folders, missing files and compiled archives (anything with a NUL
        byte near the start) all read as "".

        Raises:
            FileReadError: If the file exists but cannot be read.
        """
        if not file_path.is_file():
            return ""

        try:
            raw = file_path.read_bytes()
        except OSError as e:
            raise FileReadError(
                message=f"Failed to read file: {file_path}",
                file_path=str(file_path),
                original_exception=e,
            ) from e

        if b"\0" in raw[:BINARY_SNIFF_SIZE]:
            return ""
        return raw.decode("utf-8", errors="ignore")


class WorkspaceFile:
    """A cache or artifact file at a fixed location inside a workspace."""

    def __init__(self, file_path: Path):
        self.file_path = file_path

    @classmethod
    def for_writing(cls, file_path: Path) -> "WorkspaceFile":
        """
        Raises:
            InvalidFilePathError: If the containing folder is missing or
                read-only, so nothing could be written there.
        """
        folder = file_path.parent
        if not folder.is_dir():
            raise InvalidFilePathError(
                message=f"Parent directory does not exist: {folder}",
                file_path=str(file_path),
            )
        if not os.access(folder, os.W_OK):
            raise InvalidFilePathError(
                message=f"Parent directory is not writable: {folder}",
                file_path=str(file_path),
            )
        return cls(file_path)

    def write_json(self, data: Any) -> None:
        """
        Replace the file with `data` as indented JSON plus a trailing newline.

        Non-ASCII characters in paths are written as-is.

        Raises:
            FileWriteError: If the file cannot be written.
        """
        text = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
        try:
            self.file_path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise FileWriteError(
                message=f"Failed to write to file: {self.file_path}",
                file_path=str(self.file_path),
                original_exception=e,
            ) from e

    def discard(self) -> bool:
        """
        Delete the file if it is there.

        Returns:
            bool: True if a file was deleted, False if there was none.

        Raises:
            FileDiscardError: If the file exists but cannot be deleted.
        """
        try:
            self.file_path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise FileDiscardError(
                message=f"Failed to discard file: {self.file_path}",
                file_path=str(self.file_path),
                original_exception=e,
            ) from e
        return True


class MockFileReader:
    """
    FileReader serving canned text.

    `content` is either the text returned for every path or a function
    computing it from the path. Paths asked for are recorded in `calls`.
    """

    def __init__(self, content: str | Callable[[Path], str] = ""):
        self.content = content
        self.calls: list[Path] = []

    def read_file(self, file_path: Path) -> str:
        self.calls.append(file_path)
        if callable(self.content):
            return self.content(file_path)
        return self.content
