"""
Resolution of class references to the artifacts providing them.

Given an inclusion index and a set of requested references, `resolve` finds
the artifacts to link against:

- A package wildcard (`com.acme.*`) matches every record holding a class
  inside that package, at any depth. Several artifacts may legitimately
  match: a package can span libraries.
- An exact reference (`com.acme.Button`) matches records holding that very
  class. If several distinct artifacts provide it, the first one in index
  order wins and a collision warning names them all.
"""

from typing import Iterable

from core.models import InclusionIndex
from models import ClassField
from ui.reporter import NoOpReporter, Reporter

WILDCARD_SUFFIX = ".*"


def resolve(
    index: InclusionIndex,
    requested_classes: Iterable[str],
    reporter: Reporter | None = None,
    class_field: ClassField = ClassField.QUALIFIED,
) -> list[str]:
    """
    Resolve class references to artifact paths.

    Args:
        index: The workspace inclusion index.
        requested_classes: Exact class names and/or package wildcards.
        reporter: Receives name collision warnings.
        class_field: Which class set of each record to match against.

    Returns:
        list[str]: Unique artifact paths in descending lexicographic order.
        This order is deterministic but carries no build order meaning.
    """
    requested = list(dict.fromkeys(requested_classes))
    if not index or not requested:
        return []

    reporter = reporter if reporter is not None else NoOpReporter()
    resolved: set[str] = set()

    for class_name in requested:
        if class_name.endswith(WILDCARD_SUFFIX):
            resolved.update(_match_package(index, class_name, class_field))
            continue

        matches = _match_exact(index, class_name, class_field)
        if not matches:
            continue
        if len(matches) > 1:
            reporter.warning(
                f"Class {class_name} is provided by {len(matches)} artifacts: "
                f"{', '.join(matches)}. Using {matches[0]}."
            )
        resolved.add(matches[0])

    return sorted(resolved, reverse=True)


def _match_exact(index: InclusionIndex, class_name: str, class_field: ClassField) -> list[str]:
    """Distinct artifacts providing `class_name`, in index order."""
    matches: dict[str, None] = {}
    for record in index:
        if class_name in record.classes(class_field):
            matches[record.artifact_path] = None
    return list(matches)


def _match_package(index: InclusionIndex, wildcard: str, class_field: ClassField) -> list[str]:
    """Artifacts providing at least one class under the wildcard's package."""
    prefix = wildcard[: -len(WILDCARD_SUFFIX)] + "."
    if prefix == ".":
        return []
    return [
        record.artifact_path
        for record in index
        if any(name.startswith(prefix) for name in record.classes(class_field))
    ]
