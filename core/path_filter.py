"""
Recursive directory listing with wildcard and exclusion filtering.

`list_files` is the single directory enumeration primitive used by every
component of the resolver: locating source roots, enumerating library classes,
finding application entry files and comparing modification times.

Filters never prune the traversal, they only reduce the resulting list:
asking for folders only still walks every subfolder.
"""

import os
import re
from pathlib import Path
from typing import Iterable

from models import PathFilter

_RESERVED_FILTERS = frozenset(PathFilter)


def list_files(
    folder: Path,
    filters: Iterable[str] | None = None,
    use_relative_paths: bool = False,
    drop_extension: bool = False,
) -> list[str]:
    """
    List every file and folder under `folder`, at any depth, subject to `filters`.

    Args:
        folder: Absolute path to an existing directory. If it is not a
            directory, an empty list is returned.
        filters: Optional list mixing reserved `PathFilter` tokens and search
            patterns. Reserved tokens combine as AND; patterns combine as OR.
            A pattern containing `*` (any run of characters) or `?` (exactly
            one character) must match the whole path; a plain pattern matches
            as a substring. Giving both FILES_ONLY and FOLDERS_ONLY yields an
            empty list.
        use_relative_paths: If True, paths are returned relative to `folder`
            in slash-separated form (e.g. "com/acme/Button.as").
        drop_extension: If True, the extension of the last path segment is
            removed. Names starting with a dot are left untouched.

    Returns:
        list[str]: Matching paths in traversal order. Entries of a directory
        are visited in sorted order, so the result is deterministic.
    """
    if not folder.is_dir():
        return []

    filter_list = list(filters or [])
    reserved = {f for f in filter_list if f in _RESERVED_FILTERS}
    patterns = [_compile_pattern(f) for f in filter_list if f not in _RESERVED_FILTERS]

    results: list[str] = []
    for path, is_dir in _walk(folder):
        if not _accepts(path, is_dir, reserved, patterns):
            continue
        results.append(_refine(path, folder, use_relative_paths, drop_extension))
    return results


def list_folders(folder: Path) -> list[str]:
    """Shortcut for listing every folder (at any depth) under `folder`."""
    return list_files(folder, [PathFilter.FOLDERS_ONLY])


def make_relative(sub_path: str | Path, folder: str | Path) -> str:
    """
    Return `sub_path` relative to `folder`, in slash-separated form.

    Both paths are taken as given; no symlink resolution happens.
    """
    relative = os.path.relpath(sub_path, folder)
    return relative.replace(os.sep, "/")


def cut_off_extension(file_path: str) -> str:
    """
    Remove the extension from the last segment of `file_path`.

    Names starting with a dot (".config") have no extension and pass through.
    """
    cut = max(file_path.rfind("/"), file_path.rfind(os.sep))
    head, name = file_path[: cut + 1], file_path[cut + 1 :]
    stem, ext = os.path.splitext(name)
    if not ext:
        return file_path
    return head + stem


def _walk(folder: Path):
    """Yield (path, is_dir) for every entry under `folder`, depth first."""
    try:
        with os.scandir(folder) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError:
        return
    for entry in entries:
        try:
            is_dir = entry.is_dir()
        except OSError:
            is_dir = False
        yield entry.path, is_dir
        if is_dir:
            yield from _walk(Path(entry.path))


def _accepts(
    path: str, is_dir: bool, reserved: set[str], patterns: list[re.Pattern[str] | str]
) -> bool:
    if is_dir and PathFilter.FILES_ONLY in reserved:
        return False
    if not is_dir and PathFilter.FOLDERS_ONLY in reserved:
        return False
    if PathFilter.NO_DOT_NAMES in reserved and os.path.basename(path).startswith("."):
        return False
    if patterns:
        return any(_matches(path, p) for p in patterns)
    return True


def _matches(path: str, pattern: re.Pattern[str] | str) -> bool:
    if isinstance(pattern, str):
        return pattern in path
    return pattern.fullmatch(path) is not None


def _compile_pattern(pattern: str) -> re.Pattern[str] | str:
    """Turn a `*`/`?` wildcard pattern into a regex; plain patterns stay strings."""
    if "*" not in pattern and "?" not in pattern:
        return pattern
    parts = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


def _refine(path: str, folder: Path, use_relative_paths: bool, drop_extension: bool) -> str:
    if use_relative_paths:
        path = make_relative(path, folder)
    if drop_extension:
        path = cut_off_extension(path)
    return path
