"""
Workspace-wide inclusion index: which artifact provides which class.

Every immediate child folder of a workspace is a candidate project. Two
sources feed the index:

- Archives already present in a project's artifact folder (pre-built or
  third-party libraries), through the archive inspector.
- Library projects' sources, each source file standing for one class of the
  library artifact the project will produce.

Application projects never contribute: their artifacts are not reusable.

The result is persisted through the context's index store and, unless the
caller asks for a rebuild, reused verbatim on the next request without
looking at any project folder.
"""

import os
from pathlib import Path

from core.config import ResolverContext
from core.exceptions import WorkspaceError
from core.models import InclusionIndex, LibraryProject, LibraryRecord
from core.projects import classify_project, list_library_classes


def build_or_load_index(
    workspace_root: Path,
    context: ResolverContext,
    reuse_cache: bool = True,
    silent: bool = False,
) -> InclusionIndex:
    """
    Return the inclusion index of a workspace, from cache when possible.

    Args:
        workspace_root: The folder holding the sibling projects.
        context: Supplies settings, the index store, the archive inspector
            and the reporter.
        reuse_cache: If True and the store holds a valid index, it is returned
            as is and no project folder is scanned.
        silent: If True, ambiguous source roots are not reported.

    Returns:
        InclusionIndex: The loaded or freshly built index.

    Raises:
        WorkspaceError: If `workspace_root` is not a readable folder.
        FileWriteError: If a rebuilt index cannot be persisted.
    """
    workspace = resolve_workspace(workspace_root)
    store = context.index_store

    if reuse_cache:
        cached = store.load(workspace)
        if cached is not None:
            return cached

    try:
        candidates = sorted(p for p in workspace.iterdir() if p.is_dir())
    except OSError as e:
        raise WorkspaceError(str(workspace), f"Cannot list workspace {workspace}: {e}") from e

    index = InclusionIndex()
    for project_path in candidates:
        if not os.access(project_path, os.R_OK | os.X_OK):
            context.reporter.warning(f"Skipping unreadable folder {project_path}")
            continue
        try:
            index_archives(project_path, context, index)
            index_library_sources(project_path, context, index, silent=silent)
        except OSError as e:
            context.reporter.warning(f"Skipping folder {project_path}: {e}")

    store.save(workspace, index)
    context.reporter.info(f"Indexed {len(index)} libraries in {workspace}")
    return index


def resolve_workspace(workspace_root: Path) -> Path:
    """
    Return the absolute, symlink-free form of a workspace folder.

    Raises:
        WorkspaceError: If the folder does not exist or is not a directory.
    """
    try:
        workspace = Path(workspace_root).resolve()
    except (OSError, RuntimeError) as e:
        raise WorkspaceError(str(workspace_root)) from e
    if not workspace.is_dir():
        raise WorkspaceError(str(workspace_root))
    return workspace


def index_archives(project_path: Path, context: ResolverContext, index: InclusionIndex) -> None:
    """
    Merge one record per library archive found in the project's artifact folder.

    Private classes (starting with the private prefix) are dropped, and an
    archive the inspector cannot read contributes nothing.
    """
    settings = context.settings
    artifact_folder = project_path / settings.artifact_folder_name
    if not artifact_folder.is_dir():
        return

    for archive_path in sorted(artifact_folder.glob(f"*{settings.library_extension}")):
        if not archive_path.is_file():
            continue
        class_ids = [
            class_id
            for class_id in context.archive_inspector.list_classes(archive_path)
            if not class_id.startswith(settings.private_class_prefix)
        ]
        index.merge(
            LibraryRecord.create(
                archive_path,
                [c for c in class_ids if "." in c],
                [c for c in class_ids if "." not in c],
            )
        )


def index_library_sources(
    project_path: Path,
    context: ResolverContext,
    index: InclusionIndex,
    silent: bool = False,
) -> None:
    """Merge the record of the library a project will produce, if it is a library."""
    project = classify_project(project_path, context, silent=silent)
    if not isinstance(project, LibraryProject):
        return

    qualified, unqualified = list_library_classes(project, context.settings)
    if unqualified:
        context.reporter.warning(
            f"{project_path.name} declares classes without a package: "
            f"{', '.join(unqualified)}"
        )
    index.merge(LibraryRecord.create(project.artifact_path, qualified, unqualified))
