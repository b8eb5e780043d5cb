"""
Project discovery and classification.

A project is a folder with exactly one source root. It is an application if
its source root holds at least one markup file whose header carries an
application root tag (unit test files excepted); otherwise it is a library.
Classification happens once, here, and the rest of the resolver works on the
resulting `LibraryProject` or `ApplicationProject` value.
"""

import os
from pathlib import Path

from core.config import ResolverContext, ResolverSettings
from core.models import ApplicationProject, LibraryProject, Project
from core.path_filter import cut_off_extension, list_files, list_folders
from models import PathFilter
from utils import read_file_header, slugify_project_name


def find_source_root(
    project_path: Path, context: ResolverContext, silent: bool = False
) -> Path | None:
    """
    Locate the unique source root of a project.

    If several folders carry the source folder name, the shallowest one (then
    the lexicographically first) is used and, unless `silent`, a warning is
    reported.

    Args:
        project_path: The project folder.
        context: Supplies settings and the reporter.
        silent: If True, ambiguity is not reported.

    Returns:
        Path | None: The source root, or None if the project has none.
    """
    name = context.settings.source_folder_name
    candidates = [folder for folder in list_folders(project_path) if os.path.basename(folder) == name]
    if not candidates:
        return None

    candidates.sort(key=lambda folder: (len(Path(folder).relative_to(project_path).parts), folder))
    if len(candidates) > 1 and not silent:
        context.reporter.warning(
            f"Found {len(candidates)} '{name}' folders in {project_path}; "
            f"using {candidates[0]}. Others: {', '.join(candidates[1:])}"
        )
    return Path(candidates[0])


def find_application_files(source_root: Path, settings: ResolverSettings) -> list[Path]:
    """
    List the application entry files under a source root.

    Candidates are markup files whose first `application_header_size` bytes
    contain one of the application markers. Files whose base name starts with
    the unit test prefix are ignored.

    Returns:
        list[Path]: Entry files, most recently modified first.
    """
    entry_files: list[tuple[float, Path]] = []

    for file_path in list_files(source_root, [PathFilter.FILES_ONLY]):
        path = Path(file_path)
        if path.suffix.lower() not in settings.markup_source_extensions:
            continue
        if is_unit_test_name(path.name, settings):
            continue
        header = read_file_header(path, settings.application_header_size)
        if not any(marker in header for marker in settings.application_markers):
            continue
        try:
            entry_files.append((path.stat().st_mtime, path))
        except OSError:
            continue

    entry_files.sort(key=lambda item: item[0], reverse=True)
    return [path for _, path in entry_files]


def is_unit_test_name(name: str, settings: ResolverSettings) -> bool:
    return bool(settings.unit_test_prefix) and name.startswith(settings.unit_test_prefix)


def artifact_path_for(project_path: Path, settings: ResolverSettings, extension: str) -> Path:
    """Expected artifact path of a project: `<project>/<artifact folder>/<slug><extension>`."""
    file_name = slugify_project_name(project_path.name) + extension
    return project_path / settings.artifact_folder_name / file_name


def classify_project(
    project_path: Path, context: ResolverContext, silent: bool = False
) -> Project | None:
    """
    Classify a project folder as a library or an application.

    Args:
        project_path: The project folder.
        context: Supplies settings and the reporter.
        silent: Passed on to `find_source_root`.

    Returns:
        Project | None: The classified project, or None if the folder has
        no source root.
    """
    source_root = find_source_root(project_path, context, silent=silent)
    if source_root is None:
        return None

    settings = context.settings
    entry_files = find_application_files(source_root, settings)
    if entry_files:
        return ApplicationProject(
            path=project_path,
            source_root=source_root,
            artifact_path=artifact_path_for(
                project_path, settings, settings.application_extension
            ),
            entry_files=tuple(entry_files),
        )
    return LibraryProject(
        path=project_path,
        source_root=source_root,
        artifact_path=artifact_path_for(project_path, settings, settings.library_extension),
    )


def list_library_classes(
    project: LibraryProject, settings: ResolverSettings
) -> tuple[list[str], list[str]]:
    """
    Enumerate the classes a library provides, from its source file names.

    Each source path relative to the source root becomes a dotted name
    (`com/acme/Button.as` -> `com.acme.Button`). Unit test files are left out.

    Returns:
        tuple[list[str], list[str]]: Qualified names (with a package) and
        unqualified names (default package), both in traversal order.
    """
    patterns = [f"*{extension}" for extension in sorted(settings.source_extensions)]
    relative_paths = list_files(
        project.source_root,
        [PathFilter.FILES_ONLY, PathFilter.NO_DOT_NAMES, *patterns],
        use_relative_paths=True,
    )

    qualified: list[str] = []
    unqualified: list[str] = []
    for relative_path in relative_paths:
        class_name = cut_off_extension(relative_path).replace("/", ".")
        if is_unit_test_name(class_name.rsplit(".", 1)[-1], settings):
            continue
        if "." in class_name:
            qualified.append(class_name)
        else:
            unqualified.append(class_name)
    return qualified, unqualified
