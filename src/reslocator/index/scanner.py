"""
Root scanning: enumerating candidate resources under directory and archive roots.

Scanners only enumerate and resolve. They do not deduplicate names; the
index layer does that.
"""

from __future__ import annotations

import logging
import os
import zipfile
from collections.abc import Generator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Protocol

import pathspec

from reslocator.errors import UnresolvableLocationError
from reslocator.index.gitignore import load_gitignore, load_tool_ignore
from reslocator.index.models import ResourceLocation
from reslocator.index.roots import ArchiveRoot, DirectoryRoot, Root
from reslocator.index.types import ScannerConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanCandidate:
    """
    A resource name found under a root, not yet known to be readable.

    `raw` is scanner-specific: a filesystem path for directory roots and the
    archive entry name for archive roots.
    """

    name: str
    raw: str


class RootScanner(Protocol):
    """Enumerates and resolves candidates for a root."""

    def scan(self, root: Root) -> Generator[ScanCandidate, None, None]:
        """
        Yield candidates in a deterministic order. Any handle on the root is
        released when the generator finishes or is closed.
        """
        ...

    def resolve(self, root: Root, candidate: ScanCandidate) -> ResourceLocation:
        """Return the location of a candidate or raise `UnresolvableLocationError`."""
        ...


class FileSystemScanner:
    """
    Default scanner for directory and zip archive roots.

    Directory roots are walked with `os.walk()` in sorted order, pruning
    excluded directories in place and honoring `.gitignore` files and the
    root `.reslocatorignore`, which is not itself listed. Archive entries are
    listed in archive order, first entry only for a repeated name.
    """

    def __init__(self, config: ScannerConfig | None = None) -> None:
        self._config: ScannerConfig = config or ScannerConfig()
        self._exclude_spec: pathspec.PathSpec = pathspec.PathSpec.from_lines(
            "gitignore", self._config.effective_exclude
        )

    def scan(self, root: Root) -> Generator[ScanCandidate, None, None]:
        logger.debug("Scanning root %s", root)
        if isinstance(root, DirectoryRoot):
            yield from self._scan_directory(root)
        elif isinstance(root, ArchiveRoot):
            yield from self._scan_archive(root)
        else:
            raise TypeError(f"Unsupported root type: {type(root).__name__}")

    def resolve(self, root: Root, candidate: ScanCandidate) -> ResourceLocation:
        if isinstance(root, DirectoryRoot):
            # Catches files deleted mid-scan and dangling symlinks.
            if not Path(candidate.raw).is_file():
                raise UnresolvableLocationError(f"Not a readable file: {candidate.raw}")
        else:
            entry = PurePosixPath(candidate.raw)
            if candidate.raw.endswith("/"):
                raise UnresolvableLocationError(f"Directory entry: {candidate.raw}")
            if entry.is_absolute() or ".." in entry.parts:
                raise UnresolvableLocationError(f"Unsafe entry name: {candidate.raw}")
        return ResourceLocation(root=root, name=candidate.name)

    def _scan_directory(self, root: DirectoryRoot) -> Generator[ScanCandidate, None, None]:
        base = root.path
        tool_ignore = load_tool_ignore(self._config.tool_name, base)
        tool_ignore_file = base / f".{self._config.tool_name}ignore"
        gitignore_cache: dict[Path, pathspec.PathSpec | None] = {}

        for dirpath, dirnames, filenames in os.walk(base):
            current = Path(dirpath)
            rel_dir = current.relative_to(base)

            gitignores: list[tuple[Path, pathspec.PathSpec]] = []
            if self._config.respect_gitignore:
                gitignores = self._gitignore_chain(current, base, gitignore_cache)

            # Prune excluded directories in-place (prevents descent)
            dirnames[:] = sorted(
                d
                for d in dirnames
                if not self._is_excluded(current / d, base, gitignores, tool_ignore, is_dir=True)
            )

            for filename in sorted(filenames):
                filepath = current / filename
                if filepath == tool_ignore_file:
                    continue
                if self._is_excluded(filepath, base, gitignores, tool_ignore, is_dir=False):
                    continue
                if self._exceeds_max_size(filepath):
                    continue
                yield ScanCandidate(name=(rel_dir / filename).as_posix(), raw=str(filepath))

    def _scan_archive(self, root: ArchiveRoot) -> Generator[ScanCandidate, None, None]:
        seen: set[str] = set()
        with zipfile.ZipFile(root.path) as zf:
            for info in zf.infolist():
                # Repeated names: only the first entry is visible.
                if info.filename in seen:
                    continue
                seen.add(info.filename)
                if self._exclude_spec.match_file(info.filename):
                    continue
                max_size = self._config.files_max_size
                if max_size and info.file_size > max_size:
                    continue
                yield ScanCandidate(name=info.filename, raw=info.filename)

    def _is_excluded(
        self,
        path: Path,
        base: Path,
        gitignores: list[tuple[Path, pathspec.PathSpec]],
        tool_ignore: pathspec.PathSpec | None,
        *,
        is_dir: bool,
    ) -> bool:
        """Check a path against the exclude patterns and any ignore files."""
        suffix = "/" if is_dir else ""
        rel = path.relative_to(base).as_posix() + suffix

        if self._exclude_spec.match_file(rel):
            return True
        if tool_ignore and tool_ignore.match_file(rel):
            return True
        for spec_dir, spec in gitignores:
            if spec.match_file(path.relative_to(spec_dir).as_posix() + suffix):
                return True
        return False

    def _exceeds_max_size(self, path: Path) -> bool:
        """Check if a file exceeds the configured max size. 0 = no limit."""
        if self._config.files_max_size == 0:
            return False
        try:
            return path.stat().st_size > self._config.files_max_size
        except OSError:
            return False

    def _gitignore_chain(
        self,
        directory: Path,
        base: Path,
        cache: dict[Path, pathspec.PathSpec | None],
    ) -> list[tuple[Path, pathspec.PathSpec]]:
        """Collect gitignore specs from `base` down to `directory` (inclusive)."""
        chain: list[tuple[Path, pathspec.PathSpec]] = []
        current = base
        for part in (None, *directory.relative_to(base).parts):
            if part is not None:
                current = current / part
            if current not in cache:
                cache[current] = load_gitignore(current)
            spec = cache[current]
            if spec is not None:
                chain.append((current, spec))
        return chain
