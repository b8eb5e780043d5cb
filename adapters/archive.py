"""
Library archive inspection.

A compiled library archive is a zip container whose `catalog.xml` entry
declares every class it defines:

    <script name="com/acme/ui/Button" ...>
        <def id="com.acme.ui:Button" />
    </script>

Inspectors return those class identifiers with the package separator turned
into a dot (`com.acme.ui.Button`). Any failure to open the archive, read the
catalog or parse it yields an empty list: the archive then contributes no
classes to the index.
"""

import subprocess
import xml.etree.ElementTree as ET
import zipfile
from pathlib import Path
from typing import Callable, Protocol

from constants import ARCHIVE_CATALOG_ENTRY


class ArchiveInspector(Protocol):
    """Protocol for listing the classes declared by a library archive."""

    def list_classes(self, archive_path: Path) -> list[str]:
        """
        Return the class identifiers declared in the archive's catalog.

        Args:
            archive_path: Path of the library archive.

        Returns:
            list[str]: Dotted class identifiers in catalog order, or an empty
            list if the archive cannot be inspected.
        """


class ZipArchiveInspector:
    """Reads the catalog entry directly with `zipfile`."""

    def __init__(self, catalog_entry: str = ARCHIVE_CATALOG_ENTRY) -> None:
        self.catalog_entry = catalog_entry

    def list_classes(self, archive_path: Path) -> list[str]:
        try:
            with zipfile.ZipFile(archive_path) as archive:
                content = archive.read(self.catalog_entry)
        except (OSError, KeyError, zipfile.BadZipFile):
            return []
        return parse_catalog(content.decode("utf-8", errors="replace"))


class UnzipArchiveInspector:
    """
    Extracts the catalog entry by piping it out of the `unzip` command line tool.

    Attributes:
        cmd: Command prefix; the archive path and the entry name are appended.
    """

    def __init__(
        self,
        catalog_entry: str = ARCHIVE_CATALOG_ENTRY,
        run_factory: Callable | None = None,
    ) -> None:
        """
        Args:
            catalog_entry: Name of the manifest entry inside the archive.
            run_factory: Optional replacement for `subprocess.run`. Useful for testing.
        """
        self.catalog_entry = catalog_entry
        self.cmd = ["unzip", "-p"]
        self.run = run_factory if run_factory else subprocess.run

    def list_classes(self, archive_path: Path) -> list[str]:
        try:
            result = self.run(
                [*self.cmd, str(archive_path), self.catalog_entry],
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=True,
            )
        except (OSError, subprocess.SubprocessError):
            return []
        return parse_catalog(result.stdout or "")


def parse_catalog(xml_text: str) -> list[str]:
    """
    Extract class identifiers from the text of an archive catalog.

    Every `def` element's `id` attribute is collected, whatever namespace
    the catalog uses. Identifiers are returned in document order, without
    duplicates, with `:` replaced by `.`.

    Args:
        xml_text: The catalog document.

    Returns:
        list[str]: Class identifiers, or an empty list if the text is not XML.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError:
        return []

    found: dict[str, None] = {}
    for element in root.iter():
        if _local_name(element.tag) != "def":
            continue
        class_id = (element.get("id") or "").strip()
        if class_id:
            found[class_id.replace(":", ".")] = None
    return list(found)


def _local_name(tag: str) -> str:
    # ElementTree spells namespaced tags as "{uri}name"
    return tag.rsplit("}", 1)[-1]


ARCHIVE_INSPECTORS: dict[str, Callable[[str], ArchiveInspector]] = {
    "zip": ZipArchiveInspector,
    "unzip": UnzipArchiveInspector,
}


def make_archive_inspector(name: str, catalog_entry: str = ARCHIVE_CATALOG_ENTRY) -> ArchiveInspector:
    """
    Create the inspector registered under `name` ("zip" or "unzip").

    Raises:
        ValueError: If no inspector has that name.
    """
    try:
        factory = ARCHIVE_INSPECTORS[name]
    except KeyError:
        raise ValueError(f"Unknown archive inspector: {name!r}") from None
    return factory(catalog_entry)
