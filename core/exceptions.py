"""
Custom exception classes for the Sirius resolver.

This module defines application-specific exceptions that are raised while
reading sources, persisting the index cache, deleting artifacts or loading
workspace settings. These exceptions carry structured error information to
help with debugging and error reporting.

Only unrecoverable conditions are raised: a missing source root, a corrupt
cache or a failing archive inspection are degraded locally instead.
"""

import os
from typing import Optional


class FileIOError(Exception):
    """
    Base exception for file I/O errors.

    Attributes:
        message: A human-readable error message describing what went wrong.
        file_path: The path of the file involved, if known.
        original_exception: The underlying exception that caused this error, if any.
        diagnostic_info: A dictionary with the exception type, details and OS name.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        file_path: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.message = message or "A file operation failed"
        super().__init__(self.message)
        self.file_path = file_path
        self.original_exception = original_exception
        self.diagnostic_info = {
            "type": (
                type(original_exception).__name__ if original_exception else "Unknown"
            ),
            "details": str(original_exception) if original_exception else "No details",
            "os_name": os.name,
        }


class InvalidFilePathError(FileIOError):
    """Raised when a file path is missing or its parent directory is unusable."""


class FileReadError(FileIOError):
    """Raised when an existing file cannot be read."""


class FileWriteError(FileIOError):
    """
    Raised when data cannot be written to a file.

    Writing the workspace index cache is the one write the resolver cannot
    recover from, so this error propagates to the caller.
    """


class FileDiscardError(FileIOError):
    """Raised when a file cannot be deleted."""


class WorkspaceError(Exception):
    """
    Raised when a workspace root cannot be resolved at all.

    Attributes:
        message: A human-readable error message.
        workspace: The offending workspace path, as given.
    """

    def __init__(self, workspace: str, message: Optional[str] = None):
        self.message = message or f"Not a valid workspace folder: {workspace}"
        super().__init__(self.message)
        self.workspace = workspace


class SettingsError(Exception):
    """
    Raised when a workspace settings override file is malformed.

    Attributes:
        message: A human-readable error message.
        file_path: The settings file that failed to load.
    """

    def __init__(self, message: str, file_path: Optional[str] = None):
        self.message = message
        super().__init__(self.message)
        self.file_path = file_path
