"""
Core data models for the indexing and resolution pipeline.

This module defines the data structures shared by the indexer, the resolver,
the staleness evaluator and the invalidator: library records and the
workspace-wide inclusion index they form, and the two project variants
(library or application) a project folder is classified into.
"""

import bisect
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Iterator, TypeAlias

from models import ClassField, LibraryRecordDict


@dataclass(frozen=True)
class LibraryRecord:
    """
    One binary artifact (existing or still to be built) and the classes it provides.

    Attributes:
        artifact_path: Absolute path of the artifact, as a string.
        qualified_classes: Dotted class names, unique and in insertion order.
            Never contains wildcards.
        unqualified_classes: Bare class names (default package), unique and in
            insertion order.
    """

    artifact_path: str
    qualified_classes: tuple[str, ...] = ()
    unqualified_classes: tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        artifact_path: str | Path,
        qualified_classes: Iterable[str] = (),
        unqualified_classes: Iterable[str] = (),
    ) -> "LibraryRecord":
        """Build a record, dropping duplicate class names while keeping order."""
        return cls(
            str(artifact_path),
            tuple(dict.fromkeys(qualified_classes)),
            tuple(dict.fromkeys(unqualified_classes)),
        )

    def is_empty(self) -> bool:
        return not self.qualified_classes and not self.unqualified_classes

    def classes(self, class_field: ClassField) -> tuple[str, ...]:
        if class_field == ClassField.UNQUALIFIED:
            return self.unqualified_classes
        return self.qualified_classes

    def to_dict(self) -> LibraryRecordDict:
        return {
            "artifact_path": self.artifact_path,
            "qualified_classes": list(self.qualified_classes),
            "unqualified_classes": list(self.unqualified_classes),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "LibraryRecord":
        """
        Rebuild a record from its serialized form.

        Raises:
            ValueError: If `data` does not have the expected shape.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object, got {type(data).__name__}")
        artifact_path = data.get("artifact_path")
        qualified = data.get("qualified_classes")
        unqualified = data.get("unqualified_classes")
        if not isinstance(artifact_path, str) or not artifact_path:
            raise ValueError("Record has no artifact_path")
        for name, values in (("qualified_classes", qualified), ("unqualified_classes", unqualified)):
            if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                raise ValueError(f"Record field '{name}' must be a list of strings")
        return cls.create(artifact_path, qualified, unqualified)


def _record_sort_key(record: LibraryRecord) -> tuple[int, int]:
    return (len(record.qualified_classes), len(record.unqualified_classes))


@dataclass
class InclusionIndex:
    """
    Ordered sequence of library records for one workspace.

    Records merged through `merge` are kept sorted ascending by their
    (qualified, unqualified) class counts; records with equal counts keep
    their insertion order. Records loaded from a cache are kept verbatim.
    """

    records: list[LibraryRecord] = field(default_factory=list)

    def merge(self, record: LibraryRecord) -> bool:
        """
        Insert `record` at its sorted position.

        Returns:
            bool: False if the record provides no class at all and was skipped.
        """
        if record.is_empty():
            return False
        bisect.insort_right(self.records, record, key=_record_sort_key)
        return True

    def to_list(self) -> list[LibraryRecordDict]:
        return [record.to_dict() for record in self.records]

    @classmethod
    def from_list(cls, data: Any) -> "InclusionIndex":
        """
        Rebuild an index from its serialized form.

        Raises:
            ValueError: If `data` is not a list of valid records.
        """
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of records, got {type(data).__name__}")
        return cls([LibraryRecord.from_dict(item) for item in data])

    def __iter__(self) -> Iterator[LibraryRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class LibraryProject:
    """
    A project that compiles into one reusable library archive.

    Attributes:
        path: The project folder.
        source_root: The project's unique source folder.
        artifact_path: Where the library archive is (or will be) written.
    """

    path: Path
    source_root: Path
    artifact_path: Path


@dataclass(frozen=True)
class ApplicationProject:
    """
    A project with at least one application entry file.

    Applications never contribute to the inclusion index.

    Attributes:
        path: The project folder.
        source_root: The project's unique source folder.
        artifact_path: Where the application package is (or will be) written.
        entry_files: Application entry files, most recently modified first.
    """

    path: Path
    source_root: Path
    artifact_path: Path
    entry_files: tuple[Path, ...]

    @property
    def main_file(self) -> Path:
        return self.entry_files[0]


Project: TypeAlias = LibraryProject | ApplicationProject
