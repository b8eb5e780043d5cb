"""
Persistence of the workspace inclusion index.

The index cache is a single JSON file at the workspace root. It is written
whole after every rebuild, reused verbatim while it parses, treated as absent
when it does not, and deleted by cache invalidation. It is never partially
updated.

The store is injected into the resolver operations so that the caching
policy can be exercised without touching the filesystem (`MemoryIndexStore`).
"""

import json
from pathlib import Path
from typing import Protocol

from core.exceptions import FileDiscardError, FileReadError
from core.file_io import FilesystemFileReader, WorkspaceFile
from core.models import InclusionIndex
from ui.reporter import NoOpReporter, Reporter


class IndexStore(Protocol):
    """Protocol for loading, saving and discarding a workspace index."""

    def load(self, workspace: Path) -> InclusionIndex | None:
        """
        Return the cached index of `workspace`, or None if there is no usable cache.
        """

    def save(self, workspace: Path, index: InclusionIndex) -> None:
        """
        Persist `index` as the cache of `workspace`, replacing any previous one.

        Raises:
            FileWriteError: If the cache cannot be written.
        """

    def invalidate(self, workspace: Path) -> bool:
        """
        Delete the cache of `workspace`.

        Returns:
            bool: True if a cache existed and was deleted.
        """


class FilesystemIndexStore:
    """
    IndexStore backed by a pretty-printed JSON file at the workspace root.

    The file holds a list of records, each an object with `artifact_path`,
    `qualified_classes` and `unqualified_classes`.
    """

    def __init__(self, file_name: str, reporter: Reporter | None = None) -> None:
        self.file_name = file_name
        self.reporter = reporter if reporter is not None else NoOpReporter()

    def cache_path(self, workspace: Path) -> Path:
        return workspace / self.file_name

    def load(self, workspace: Path) -> InclusionIndex | None:
        path = self.cache_path(workspace)
        if not path.is_file():
            return None

        try:
            content = FilesystemFileReader().read_file(path)
            return InclusionIndex.from_list(json.loads(content))
        except (FileReadError, json.JSONDecodeError, ValueError) as e:
            self.reporter.info(f"Ignoring unreadable index cache {path} ({e}); rebuilding.")
            return None

    def save(self, workspace: Path, index: InclusionIndex) -> None:
        WorkspaceFile.for_writing(self.cache_path(workspace)).write_json(index.to_list())

    def invalidate(self, workspace: Path) -> bool:
        path = self.cache_path(workspace)
        try:
            if not WorkspaceFile(path).discard():
                return False
        except FileDiscardError as e:
            self.reporter.warning(e.message)
            return False
        self.reporter.info(f"Deleted index cache {path}")
        return True


class MemoryIndexStore:
    """
    In-memory implementation of IndexStore for testing.

    Attributes (for test inspection):
        indexes: Stored indexes, keyed by workspace path.
        load_calls: Workspaces passed to load().
        save_calls: Workspaces passed to save().
        invalidate_calls: Workspaces passed to invalidate().
    """

    def __init__(self, indexes: dict[Path, InclusionIndex] | None = None) -> None:
        self.indexes: dict[Path, InclusionIndex] = dict(indexes or {})
        self.load_calls: list[Path] = []
        self.save_calls: list[Path] = []
        self.invalidate_calls: list[Path] = []

    def load(self, workspace: Path) -> InclusionIndex | None:
        self.load_calls.append(workspace)
        return self.indexes.get(workspace)

    def save(self, workspace: Path, index: InclusionIndex) -> None:
        self.save_calls.append(workspace)
        self.indexes[workspace] = index

    def invalidate(self, workspace: Path) -> bool:
        self.invalidate_calls.append(workspace)
        return self.indexes.pop(workspace, None) is not None
