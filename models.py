"""
Type definitions shared across the Sirius resolver.

This module contains the enums and TypedDict structures that are used
throughout the codebase for type safety and consistency, including the
on-disk shape of an index cache record.
"""

from enum import StrEnum
from typing import TypedDict


class FileKind(StrEnum):
    """
    Kind of a source file, as far as class reference scanning is concerned.

    General sources are scanned for imports and inline qualified names only.
    Markup sources are additionally scanned for namespace declarations.
    """

    SOURCE = "source"
    MARKUP = "markup"


class ClassField(StrEnum):
    """
    Selects which class set of a library record a lookup runs against.

    QUALIFIED holds dotted names (`com.acme.Button`); UNQUALIFIED holds bare
    identifiers of classes declared in the default package.
    """

    QUALIFIED = "qualified"
    UNQUALIFIED = "unqualified"


class PathFilter(StrEnum):
    """
    Reserved exclusion tokens understood by `list_files`.

    Any other string in a filter list is treated as a search pattern.
    """

    FILES_ONLY = "FILES_ONLY"
    FOLDERS_ONLY = "FOLDERS_ONLY"
    NO_DOT_NAMES = "NO_DOT_NAMES"


class LibraryRecordDict(TypedDict):
    """
    Serialized form of a single library record in the index cache file.

    Attributes:
        artifact_path: Absolute path of the archive providing the classes.
        qualified_classes: Dotted class names, in insertion order.
        unqualified_classes: Bare class names, in insertion order.
    """

    artifact_path: str
    qualified_classes: list[str]
    unqualified_classes: list[str]
