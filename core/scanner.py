"""
Lexical extraction of class references from source text.

This is deliberately not a parser. A fixed set of compiled patterns is run
over the raw text of each file, so references are found wherever they appear
textually: commented-out imports and string literals that look like qualified
names are reported too (over-matching), and references spelled in unusual
ways (an import split across lines by comments, say) are missed
(under-matching).

Three rules are applied and their results unioned:

1. Import form: `import com.acme.ui.Button` or `import com.acme.ui.*`.
2. Inline qualified form: `com.acme.ui.Button:Skin` is recorded as
   `com.acme.ui.Button.Skin`.
3. Namespace declarations, in markup files only:
   `xmlns:ui="com.acme.ui.*"` is recorded as `com.acme.ui.*`.
"""

import re
from pathlib import Path

from core.config import ResolverContext, ResolverSettings
from core.exceptions import FileReadError
from core.path_filter import list_files
from models import FileKind, PathFilter

_IDENTIFIER = r"[A-Za-z_$][\w$]*"
_DOTTED = rf"{_IDENTIFIER}(?:\.{_IDENTIFIER})*"

IMPORT_PATTERN = re.compile(rf"\bimport\s+({_DOTTED}(?:\.\*)?)")
INLINE_QUALIFIED_PATTERN = re.compile(
    rf"(?<![\w$.])({_IDENTIFIER}(?:\.{_IDENTIFIER})+):({_IDENTIFIER})"
)
NAMESPACE_PATTERN = re.compile(
    rf"\bxmlns:[\w.-]+\s*=\s*[\"']({_DOTTED}(?:\.\*)?)[\"']"
)


def scan_source(text: str, file_kind: FileKind) -> list[str]:
    """
    Extract the class references contained in one file's text.

    Args:
        text: The full text of the file.
        file_kind: MARKUP enables the namespace declaration rule.

    Returns:
        list[str]: Unique references, in order of discovery (import rule
        first, then inline qualified names, then namespaces).
    """
    found: dict[str, None] = {}

    for match in IMPORT_PATTERN.finditer(text):
        found[match.group(1)] = None

    for match in INLINE_QUALIFIED_PATTERN.finditer(text):
        found[f"{match.group(1)}.{match.group(2)}"] = None

    if file_kind == FileKind.MARKUP:
        for match in NAMESPACE_PATTERN.finditer(text):
            found[match.group(1)] = None

    return list(found)


def file_kind_for(file_path: str | Path, settings: ResolverSettings) -> FileKind | None:
    """Return how a file is scanned, or None if it is not a source file."""
    suffix = Path(file_path).suffix.lower()
    if suffix in settings.markup_source_extensions:
        return FileKind.MARKUP
    if suffix in settings.general_source_extensions:
        return FileKind.SOURCE
    return None


def list_class_imports(source_root: Path, context: ResolverContext) -> list[str]:
    """
    Collect the class references of every source file under `source_root`.

    Files that cannot be read are reported and skipped.

    Args:
        source_root: Folder to scan, at any depth.
        context: Supplies settings, the file reader and the reporter.

    Returns:
        list[str]: The union of all references, sorted lexicographically.
    """
    references: set[str] = set()

    for file_path in list_files(source_root, [PathFilter.FILES_ONLY]):
        file_kind = file_kind_for(file_path, context.settings)
        if file_kind is None:
            continue
        try:
            text = context.file_reader.read_file(Path(file_path))
        except FileReadError as e:
            context.reporter.warning(f"Skipping unreadable source {file_path}: {e.message}")
            continue
        references.update(scan_source(text, file_kind))

    return sorted(references)
