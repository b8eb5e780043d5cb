"""
Recursive purge of computed artifacts.

Invalidating a project deletes the artifacts of every project it depends on
(depth first), then its own artifact, and finally the workspace index cache.
Only the outermost call deletes the cache, so it is removed exactly once no
matter how deep the recursion goes.
"""

from pathlib import Path

from core.config import ResolverContext
from core.dependencies import Trail, enter_trail, find_dependency_projects
from core.exceptions import FileDiscardError
from core.file_io import WorkspaceFile
from core.indexer import resolve_workspace
from core.projects import classify_project, find_source_root


def invalidate(
    project_path: Path,
    context: ResolverContext,
    keep_index_cache: bool = False,
    _trail: Trail = (),
) -> list[Path]:
    """
    Delete the artifacts of a project and of its dependencies.

    Args:
        project_path: The project folder.
        context: Supplies settings, index store and reporter.
        keep_index_cache: If False, the workspace index cache is deleted as
            the last step. Nested calls always keep it.

    Returns:
        list[Path]: Artifacts deleted, dependencies first.
    """
    project_path = Path(project_path).resolve()
    if not project_path.exists():
        return []

    deleted: list[Path] = []
    trail = enter_trail(project_path, _trail, context)
    if trail is None:
        return deleted

    source_root = find_source_root(project_path, context, silent=bool(_trail))
    if source_root is not None:
        for dependency in find_dependency_projects(project_path, source_root, context):
            deleted.extend(invalidate(dependency, context, keep_index_cache=True, _trail=trail))

        project = classify_project(project_path, context, silent=True)
        if project is not None and _discard_artifact(project.artifact_path, context):
            deleted.append(project.artifact_path)

    if not keep_index_cache:
        context.index_store.invalidate(resolve_workspace(project_path.parent))
    return deleted


def _discard_artifact(artifact_path: Path, context: ResolverContext) -> bool:
    try:
        if not WorkspaceFile(artifact_path).discard():
            return False
    except FileDiscardError as e:
        context.reporter.warning(e.message)
        return False
    context.reporter.info(f"Deleted {artifact_path}")
    return True
