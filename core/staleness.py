"""
Build staleness evaluation.

A project must be rebuilt when it has never been built, when one of the
projects it depends on must be rebuilt, or when any file of its source root
is newer than its artifact. Dependencies are evaluated first, depth first,
and the first stale one settles the verdict.
"""

from pathlib import Path

from core.config import ResolverContext
from core.dependencies import Trail, enter_trail, find_dependency_projects
from core.path_filter import list_files
from core.projects import classify_project, find_source_root
from models import PathFilter


def must_build(project_path: Path, context: ResolverContext, _trail: Trail = ()) -> bool:
    """
    Decide whether a project, or any project it depends on, needs rebuilding.

    Args:
        project_path: The project folder.
        context: Supplies settings, index store, reporter and file reader.

    Returns:
        bool: True if the project must be built. A missing project folder or
        source root yields False, a missing artifact folder or artifact yields
        True.
    """
    project_path = Path(project_path).resolve()
    if not project_path.exists():
        return False

    trail = enter_trail(project_path, _trail, context)
    if trail is None:
        return False

    source_root = find_source_root(project_path, context, silent=bool(_trail))
    if source_root is None:
        return False

    if not (project_path / context.settings.artifact_folder_name).is_dir():
        return True

    for dependency in find_dependency_projects(project_path, source_root, context):
        if must_build(dependency, context, trail):
            return True

    project = classify_project(project_path, context, silent=True)
    if project is None:
        return False
    if not project.artifact_path.is_file():
        return True

    return has_newer_sources(project.source_root, project.artifact_path)


def has_newer_sources(source_root: Path, artifact_path: Path) -> bool:
    """True if any file under `source_root` was modified after `artifact_path`."""
    try:
        artifact_mtime = artifact_path.stat().st_mtime
    except OSError:
        return True

    for file_path in list_files(source_root, [PathFilter.FILES_ONLY]):
        try:
            if Path(file_path).stat().st_mtime > artifact_mtime:
                return True
        except OSError:
            continue
    return False
