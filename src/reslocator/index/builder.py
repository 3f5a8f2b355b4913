"""
ResourceIndexBuilder: collects roots, then scans them into a `ResourceIndex`.

Root validation is strict (a bad root fails immediately), while per-resource
resolution is lenient (candidates without a usable location are dropped).
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from contextlib import closing
from pathlib import Path

from reslocator.errors import InvalidRootError, NoRootConfiguredError, UnresolvableLocationError
from reslocator.index.models import Resource, ResourceIndex
from reslocator.index.roots import ArchiveRoot, DirectoryRoot, Root, root_for
from reslocator.index.scanner import FileSystemScanner, RootScanner
from reslocator.index.types import ScannerConfig

logger = logging.getLogger(__name__)


class ResourceIndexBuilder:
    """
    Accumulates roots in insertion order, ignoring repeats.

    Usage::

        index = (
            ResourceIndexBuilder()
            .add_directory("resources")
            .add_archive("vendor/data.zip")
            .build()
        )
    """

    def __init__(
        self,
        scanner: RootScanner | None = None,
        config: ScannerConfig | None = None,
    ) -> None:
        self._scanner: RootScanner = scanner or FileSystemScanner(config)
        # dict keys preserve insertion order and drop duplicates.
        self._roots: dict[Root, None] = {}

    @property
    def roots(self) -> tuple[Root, ...]:
        return tuple(self._roots)

    def add_root(self, root: Root) -> ResourceIndexBuilder:
        """Add an already-validated root. Adding the same root again is a no-op."""
        if root in self._roots:
            logger.debug("Root already added: %s", root)
        self._roots.setdefault(root, None)
        return self

    def add_directory(self, path: str | Path) -> ResourceIndexBuilder:
        return self.add_root(DirectoryRoot.of(path))

    def add_archive(self, path: str | Path) -> ResourceIndexBuilder:
        return self.add_root(ArchiveRoot.of(path))

    def add_path(self, path: str | Path) -> ResourceIndexBuilder:
        """Add a directory or archive, detecting which from the filesystem."""
        return self.add_root(root_for(path))

    def add_search_path(self, entries: Iterable[str | Path] | None = None) -> ResourceIndexBuilder:
        """
        Add every usable entry of an import search path (defaults to `sys.path`).

        Entries that are neither directories nor valid archives are skipped,
        but at least one must be usable.
        """
        if entries is None:
            entries = sys.path
        usable: list[Root] = []
        for entry in entries:
            # An empty sys.path entry means the current directory.
            try:
                usable.append(root_for(entry or "."))
            except InvalidRootError as e:
                logger.debug("Skipping search path entry %r: %s", entry, e)
        if not usable:
            raise InvalidRootError("No usable directory or archive in search path")
        for root in usable:
            self.add_root(root)
        return self

    def build(self) -> ResourceIndex:
        """
        Scan all roots into a fresh, immutable index.

        Each call rescans, so later calls see roots added in between.
        """
        if not self._roots:
            raise NoRootConfiguredError("No source configured: add at least one root")

        resources: list[Resource] = []
        dropped = 0
        for root in self._roots:
            with closing(self._scanner.scan(root)) as candidates:
                for candidate in candidates:
                    try:
                        location = self._scanner.resolve(root, candidate)
                    except UnresolvableLocationError as e:
                        logger.debug("Dropping %s: %s", candidate.name, e)
                        dropped += 1
                        continue
                    resources.append(Resource(name=candidate.name, location=location))

        index = ResourceIndex(resources=tuple(resources))
        logger.info(
            "Indexed %d resources from %d roots (%d unresolvable, %d shadowed)",
            len(index),
            len(self._roots),
            dropped,
            len(resources) - len(index),
        )
        return index
