"""
Resource index: roots, scanning, and the immutable index built from them.

Usage::

    from reslocator.index import ResourceIndexBuilder, ScannerConfig

    builder = ResourceIndexBuilder(config=ScannerConfig(extend_exclude=["drafts/"]))
    index = builder.add_directory("resources").build()
    print(index.names())
"""

from reslocator.index.builder import ResourceIndexBuilder
from reslocator.index.defaults import DEFAULT_EXCLUDES
from reslocator.index.models import Resource, ResourceIndex, ResourceLocation
from reslocator.index.roots import ArchiveRoot, DirectoryRoot, Root, root_for
from reslocator.index.scanner import FileSystemScanner, RootScanner, ScanCandidate
from reslocator.index.types import ScannerConfig

__all__ = [
    "DEFAULT_EXCLUDES",
    "ArchiveRoot",
    "DirectoryRoot",
    "FileSystemScanner",
    "Resource",
    "ResourceIndex",
    "ResourceIndexBuilder",
    "ResourceLocation",
    "Root",
    "RootScanner",
    "ScanCandidate",
    "ScannerConfig",
    "root_for",
]
