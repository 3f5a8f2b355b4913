"""
Root containers that resources are enumerated from.

A root is either a directory or a zip-based archive. Roots are frozen values
keyed by their resolved path, so adding the same root twice is detectable.
"""

from __future__ import annotations

import zipfile
from dataclasses import dataclass
from pathlib import Path

from reslocator.errors import InvalidRootError


@dataclass(frozen=True)
class DirectoryRoot:
    """A directory whose files are resources named by their relative path."""

    path: Path

    @classmethod
    def of(cls, path: str | Path) -> DirectoryRoot:
        """Validate that `path` is an existing directory."""
        p = Path(path)
        if not p.is_dir():
            raise InvalidRootError(f"Not a directory: {path}")
        return cls(p.resolve())

    def entry_uri(self, name: str) -> str:
        return (self.path / name).as_uri()

    def read_entry(self, name: str) -> bytes:
        return (self.path / name).read_bytes()

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class ArchiveRoot:
    """A zip container (`.zip`, `.jar`, `.whl`, ...) whose entries are resources."""

    path: Path

    @classmethod
    def of(cls, path: str | Path) -> ArchiveRoot:
        """Validate that `path` is a readable, well-formed zip archive."""
        p = Path(path)
        if not p.is_file():
            raise InvalidRootError(f"Archive not found: {path}")
        try:
            # Opening reads the central directory, which is enough to reject junk.
            with zipfile.ZipFile(p):
                pass
        except (zipfile.BadZipFile, OSError) as e:
            raise InvalidRootError(f"Not a valid archive: {path}") from e
        return cls(p.resolve())

    def entry_uri(self, name: str) -> str:
        return f"zip:{self.path.as_uri()}!/{name}"

    def read_entry(self, name: str) -> bytes:
        """
        Read one entry, opening and closing the archive around the read. When
        an archive repeats a name, the first copy is read, matching the scan.
        """
        try:
            with zipfile.ZipFile(self.path) as zf:
                info = next((i for i in zf.infolist() if i.filename == name), None)
                if info is None:
                    raise FileNotFoundError(f"No entry {name!r} in {self.path}")
                return zf.read(info)
        except zipfile.BadZipFile as e:
            raise OSError(f"Corrupt archive {self.path}: {e}") from e

    def __str__(self) -> str:
        return str(self.path)


Root = DirectoryRoot | ArchiveRoot


def root_for(path: str | Path) -> Root:
    """Pick the root kind for `path`: directories as-is, regular files as archives."""
    p = Path(path)
    if p.is_dir():
        return DirectoryRoot.of(p)
    if p.is_file():
        return ArchiveRoot.of(p)
    raise InvalidRootError(f"Path not found: {path}")
