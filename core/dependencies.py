"""
Discovery of the projects a project depends on.

A project's source references are resolved against the workspace index and
each resolved artifact is mapped back to the project owning it (the parent
of the artifact folder). The project itself is never among its dependencies:
a library referencing its own classes resolves to its own artifact, which is
skipped here.

Recursive walks over dependencies carry a trail of the projects currently
being visited, so that a cycle through several projects is reported instead
of recursing forever.
"""

import os
from pathlib import Path

from core.config import ResolverContext
from core.indexer import build_or_load_index
from core.resolver import resolve
from core.scanner import list_class_imports
from utils import paths_are_equal

Trail = tuple[str, ...]


def find_dependency_projects(
    project_path: Path, source_root: Path, context: ResolverContext
) -> list[Path]:
    """
    List the projects owning the artifacts a project's sources resolve to.

    Args:
        project_path: The project folder.
        source_root: The project's source root.
        context: Supplies settings, index store and reporter.

    Returns:
        list[Path]: Owning project folders, without duplicates and without
        the project itself, in resolved artifact order.
    """
    project_path = Path(project_path).resolve()
    index = build_or_load_index(project_path.parent, context, reuse_cache=True, silent=True)
    references = list_class_imports(source_root, context)
    artifacts = resolve(index, references, context.reporter)

    owners: dict[Path, None] = {}
    for artifact in artifacts:
        owner = owning_project(Path(artifact))
        if paths_are_equal(owner, project_path):
            continue
        owners[owner] = None
    return list(owners)


def owning_project(artifact_path: Path) -> Path:
    """The project an artifact belongs to: two levels up from the artifact file."""
    return artifact_path.parent.parent


def canonical_path(path: Path) -> str:
    return os.path.normcase(str(Path(path).resolve()))


def enter_trail(
    project_path: Path, trail: Trail, context: ResolverContext
) -> Trail | None:
    """
    Push a project onto a recursion trail.

    Returns:
        Trail | None: The extended trail, or None (after reporting the cycle)
        if the project is already being visited.
    """
    key = canonical_path(project_path)
    if key in trail:
        cycle = [Path(p).name for p in trail[trail.index(key):]] + [Path(key).name]
        context.reporter.warning(f"Dependency cycle detected: {' -> '.join(cycle)}")
        return None
    return trail + (key,)
