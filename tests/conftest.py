"""
Shared fixtures for resolver tests.

This module provides reusable pytest fixtures: a workspace builder that lays
out library and application projects under `tmp_path`, a stub archive
inspector, and a resolver context wired with test doubles.
"""

import os
from pathlib import Path

import pytest

from core.config import ResolverContext, ResolverSettings
from core.file_io import FilesystemFileReader
from core.index_store import MemoryIndexStore
from ui.reporter import MockReporter

APPLICATION_MXML = """<?xml version="1.0" encoding="utf-8"?>
<s:WindowedApplication xmlns:fx="http://ns.adobe.com/mxml/2009"
                       xmlns:s="library://ns.adobe.com/flex/spark">
</s:WindowedApplication>
"""


class StubArchiveInspector:
    """
    ArchiveInspector returning canned class lists, keyed by archive file name.

    Attributes (for test inspection):
        calls: Archive paths passed to list_classes().
    """

    def __init__(self, classes_by_name: dict[str, list[str]] | None = None):
        self.classes_by_name = classes_by_name or {}
        self.calls: list[Path] = []

    def list_classes(self, archive_path: Path) -> list[str]:
        self.calls.append(archive_path)
        return list(self.classes_by_name.get(archive_path.name, []))


class WorkspaceBuilder:
    """Lays out projects, sources and artifacts inside a workspace folder."""

    def __init__(self, root: Path):
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def library(self, name: str, classes: dict[str, str] | list[str]) -> Path:
        """
        Create a library project.

        Args:
            name: Project folder name.
            classes: Either dotted class names (written with empty bodies) or
                a mapping of dotted class name to file content.
        """
        project = self.root / name
        sources = classes if isinstance(classes, dict) else {c: "" for c in classes}
        for class_name, content in sources.items():
            self.source(project, class_name.replace(".", "/") + ".as", content)
        (project / "src").mkdir(parents=True, exist_ok=True)
        return project

    def application(self, name: str, main_file: str = "Main.mxml", body: str = "") -> Path:
        project = self.root / name
        self.source(project, main_file, APPLICATION_MXML.replace("</s:", body + "</s:"))
        return project

    def source(self, project: Path, relative_path: str, content: str = "") -> Path:
        path = project / "src" / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def artifact(self, project: Path, file_name: str, mtime: float | None = None) -> Path:
        path = project / "bin" / file_name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"PK")
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    def touch(self, path: Path, mtime: float) -> None:
        os.utime(path, (mtime, mtime))

    def touch_tree(self, folder: Path, mtime: float) -> None:
        """Set the modification time of every file and folder under `folder`."""
        for path in folder.rglob("*"):
            os.utime(path, (mtime, mtime))


@pytest.fixture
def workspace(tmp_path):
    """Builder for a workspace rooted at tmp_path / "ws" (symlink-free)."""
    return WorkspaceBuilder(tmp_path.resolve() / "ws")


@pytest.fixture
def reporter():
    return MockReporter()


@pytest.fixture
def index_store():
    return MemoryIndexStore()


@pytest.fixture
def archive_inspector():
    return StubArchiveInspector()


@pytest.fixture
def context(reporter, index_store, archive_inspector):
    """Resolver context with default settings and recording collaborators."""
    return ResolverContext(
        settings=ResolverSettings(),
        reporter=reporter,
        index_store=index_store,
        archive_inspector=archive_inspector,
        file_reader=FilesystemFileReader(),
    )
