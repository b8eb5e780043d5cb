"""
Resolver configuration and the explicit context passed to every operation.

`ResolverSettings` collects the ecosystem conventions from `constants.py`,
optionally overridden per workspace through a `sirius.json` file.
`ResolverContext` bundles the settings with the collaborators an operation
needs (reporter, index store, archive inspector, file reader), so that no
process-wide mutable state is involved.
"""

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from adapters.archive import (
    ARCHIVE_INSPECTORS,
    ArchiveInspector,
    ZipArchiveInspector,
    make_archive_inspector,
)
from constants import (
    APPLICATION_EXTENSION,
    APPLICATION_HEADER_SIZE,
    APPLICATION_ROOT_MARKERS,
    ARCHIVE_CATALOG_ENTRY,
    ARCHIVE_INSPECTOR,
    ARTIFACT_FOLDER_NAME,
    GENERAL_SOURCE_EXTENSIONS,
    INDEX_CACHE_FILE_NAME,
    LIBRARY_EXTENSION,
    MARKUP_SOURCE_EXTENSIONS,
    PRIVATE_CLASS_PREFIX,
    SETTINGS_FILE_NAME,
    SOURCE_FOLDER_NAME,
    UNIT_TEST_PREFIX,
)
from core.exceptions import FileReadError, SettingsError
from core.file_io import FileReader, FilesystemFileReader
from core.index_store import FilesystemIndexStore, IndexStore
from ui.reporter import Reporter, RichReporter


@dataclass(frozen=True)
class ResolverSettings:
    """
    Conventions used to interpret a workspace.

    Attributes:
        source_folder_name: Name of the folder holding a project's sources.
        artifact_folder_name: Name of the folder holding a project's artifacts.
        library_extension: Extension of library archives.
        application_extension: Extension of application packages.
        general_source_extensions: Extensions scanned with general rules.
        markup_source_extensions: Extensions scanned with markup rules; also
            the candidates for application entry files.
        application_markers: Substrings identifying an application entry file.
        application_header_size: Bytes of each markup file searched for markers.
        unit_test_prefix: Base-name prefix of unit test files.
        private_class_prefix: Prefix of archive classes that are never indexed.
        catalog_entry: Name of the manifest entry inside library archives.
        archive_inspector: How archives are opened, "zip" or "unzip".
        index_cache_file_name: Name of the index cache at the workspace root.
        quiet: If True, informational and warning output is suppressed.
    """

    source_folder_name: str = SOURCE_FOLDER_NAME
    artifact_folder_name: str = ARTIFACT_FOLDER_NAME
    library_extension: str = LIBRARY_EXTENSION
    application_extension: str = APPLICATION_EXTENSION
    general_source_extensions: frozenset[str] = GENERAL_SOURCE_EXTENSIONS
    markup_source_extensions: frozenset[str] = MARKUP_SOURCE_EXTENSIONS
    application_markers: tuple[str, ...] = APPLICATION_ROOT_MARKERS
    application_header_size: int = APPLICATION_HEADER_SIZE
    unit_test_prefix: str = UNIT_TEST_PREFIX
    private_class_prefix: str = PRIVATE_CLASS_PREFIX
    catalog_entry: str = ARCHIVE_CATALOG_ENTRY
    archive_inspector: str = ARCHIVE_INSPECTOR
    index_cache_file_name: str = INDEX_CACHE_FILE_NAME
    quiet: bool = False

    @property
    def source_extensions(self) -> frozenset[str]:
        return self.general_source_extensions | self.markup_source_extensions


@dataclass
class ResolverContext:
    """
    Everything an operation needs besides its own arguments.

    Attributes:
        settings: Workspace conventions.
        reporter: Destination of warnings and informational messages.
        index_store: Persistence of the workspace inclusion index.
        archive_inspector: Lists the classes declared by a library archive.
        file_reader: Reads source files.
    """

    settings: ResolverSettings = field(default_factory=ResolverSettings)
    reporter: Reporter = field(default_factory=RichReporter)
    index_store: IndexStore | None = None
    archive_inspector: ArchiveInspector = field(default_factory=ZipArchiveInspector)
    file_reader: FileReader = field(default_factory=FilesystemFileReader)

    def __post_init__(self) -> None:
        if self.index_store is None:
            self.index_store = FilesystemIndexStore(
                self.settings.index_cache_file_name, self.reporter
            )


def load_settings(workspace_root: Path, quiet: bool = False) -> ResolverSettings:
    """
    Load the settings of a workspace.

    Defaults come from `constants.py`. If a `sirius.json` object exists at the
    workspace root, each of its keys overrides the settings field of the same
    name. Lists are accepted wherever a tuple or frozenset is expected.

    Args:
        workspace_root: The workspace folder.
        quiet: Value of the `quiet` setting; it is never read from the file.

    Returns:
        ResolverSettings: The merged settings.

    Raises:
        SettingsError: If the file is not valid JSON, not an object, names an
            unknown setting or gives a value of the wrong type.
    """
    settings = ResolverSettings(quiet=quiet)
    settings_path = workspace_root / SETTINGS_FILE_NAME
    if not settings_path.is_file():
        return settings

    try:
        content = FilesystemFileReader().read_file(settings_path)
        data = json.loads(content)
    except (FileReadError, json.JSONDecodeError) as e:
        raise SettingsError(
            f"Could not load settings: {e}", file_path=str(settings_path)
        ) from e

    if not isinstance(data, dict):
        raise SettingsError("Settings file must contain a JSON object", str(settings_path))

    overrides = {
        name: _coerce_setting(name, value, getattr(settings, name), settings_path)
        for name, value in data.items()
    }
    return replace(settings, **overrides)


def _coerce_setting(name: str, value: Any, default: Any, settings_path: Path) -> Any:
    known = {f.name for f in fields(ResolverSettings)} - {"quiet"}
    if name not in known:
        raise SettingsError(f"Unknown setting '{name}'", str(settings_path))

    if isinstance(default, bool):
        valid = isinstance(value, bool)
    elif isinstance(default, int):
        valid = isinstance(value, int) and not isinstance(value, bool) and value > 0
    elif isinstance(default, str):
        valid = isinstance(value, str) and bool(value)
    else:
        valid = isinstance(value, list) and all(isinstance(v, str) and v for v in value)
        if valid:
            value = frozenset(value) if isinstance(default, frozenset) else tuple(value)

    if name == "archive_inspector" and value not in ARCHIVE_INSPECTORS:
        valid = False

    if not valid:
        raise SettingsError(f"Invalid value for setting '{name}': {value!r}", str(settings_path))
    return value


def build_context(workspace_root: Path, quiet: bool = False) -> ResolverContext:
    """
    Wire the production collaborators for a workspace.

    Raises:
        SettingsError: If the workspace settings file is malformed.
    """
    settings = load_settings(workspace_root, quiet=quiet)
    reporter = RichReporter(quiet=quiet)
    return ResolverContext(
        settings=settings,
        reporter=reporter,
        index_store=FilesystemIndexStore(settings.index_cache_file_name, reporter),
        archive_inspector=make_archive_inspector(settings.archive_inspector, settings.catalog_entry),
    )


def workspace_of_source_root(source_root: Path) -> Path:
    """
    Find the workspace a source folder belongs to.

    The nearest folder above the source folder's project that holds a
    settings file is the workspace. Without one, the source folder is taken
    to sit directly inside its project, so the workspace is two levels up.
    """
    project = Path(source_root).resolve().parent
    for folder in project.parents:
        if (folder / SETTINGS_FILE_NAME).is_file():
            return folder
    return project.parent
