"""
Application-wide constants and ecosystem conventions.

This module defines the defaults used throughout the Sirius resolver: the
folder layout of a project, the file extensions of sources and artifacts, the
markers that identify an application entry point and the name of the index
cache file persisted at every workspace root. Every value here can be
overridden per workspace through `ResolverSettings`.
"""

from typing import Final


# Folder layout of a project.
# A project owns exactly one source root (a descendant folder literally named
# SOURCE_FOLDER_NAME) and stores its compiled artifacts (and any pre-built
# third-party archives) in ARTIFACT_FOLDER_NAME directly under the project.
SOURCE_FOLDER_NAME: Final[str] = "src"
ARTIFACT_FOLDER_NAME: Final[str] = "bin"

# Artifact extensions.
# Libraries produce a compiled archive (a zip container with a catalog), while
# applications produce an installable package.
LIBRARY_EXTENSION: Final[str] = ".swc"
APPLICATION_EXTENSION: Final[str] = ".air"

# Source file extensions, split by scanning rules.
# General sources only honour import and inline qualified forms; markup files
# additionally declare namespaces through `xmlns:prefix="pkg.*"` attributes.
GENERAL_SOURCE_EXTENSIONS: Final[frozenset[str]] = frozenset({".as"})
MARKUP_SOURCE_EXTENSIONS: Final[frozenset[str]] = frozenset({".mxml"})

# Application entry points are markup files whose header carries one of these
# root tags. Only the first APPLICATION_HEADER_SIZE bytes are inspected.
APPLICATION_ROOT_MARKERS: Final[tuple[str, ...]] = (
    "<s:WindowedApplication",
    "<mx:WindowedApplication",
    "<s:Application",
    "<mx:Application",
)
APPLICATION_HEADER_SIZE: Final[int] = 1024

# Files whose base name starts with this prefix are unit tests: they never
# make a project an application and never contribute library classes.
UNIT_TEST_PREFIX: Final[str] = "Test"

# Archive classes starting with this prefix are compiler-generated internals.
PRIVATE_CLASS_PREFIX: Final[str] = "_"

# Name of the manifest entry inside a library archive.
ARCHIVE_CATALOG_ENTRY: Final[str] = "catalog.xml"

# How archives are opened: "zip" reads them in-process, "unzip" shells out to
# the unzip tool.
ARCHIVE_INSPECTOR: Final[str] = "zip"

# Workspace-level files.
INDEX_CACHE_FILE_NAME: Final[str] = ".sirius_index.json"
SETTINGS_FILE_NAME: Final[str] = "sirius.json"

# Separator used when deriving an artifact name from a project folder name.
ARTIFACT_NAME_SEPARATOR: Final[str] = "_"
