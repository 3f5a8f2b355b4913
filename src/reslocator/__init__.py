"""
reslocator: locate named resources in directories and zip archives by glob
pattern, and load them into typed values.

Usage::

    from reslocator import ResourceLocator, properties_loader

    locator = ResourceLocator.from_paths(["resources"])
    for book in locator.fetch("books/*.properties", properties_loader()):
        print(book["title"])
"""

from reslocator.errors import (
    GlobSyntaxError,
    InvalidRootError,
    NoRootConfiguredError,
    ReslocatorError,
    ResourceLoadError,
    UnresolvableLocationError,
)
from reslocator.index import (
    ArchiveRoot,
    DirectoryRoot,
    FileSystemScanner,
    Resource,
    ResourceIndex,
    ResourceIndexBuilder,
    ResourceLocation,
    RootScanner,
    ScanCandidate,
    ScannerConfig,
)
from reslocator.loaders import (
    ResourceLoader,
    bytes_loader,
    json_loader,
    markdown_loader,
    parse_properties,
    properties_loader,
    text_loader,
    toml_loader,
)
from reslocator.locator import LoadOutcome, ResourceLocator
from reslocator.pattern import GlobMatcher, compile_glob, glob_to_regex

__all__ = [
    "ArchiveRoot",
    "DirectoryRoot",
    "FileSystemScanner",
    "GlobMatcher",
    "GlobSyntaxError",
    "InvalidRootError",
    "LoadOutcome",
    "NoRootConfiguredError",
    "ReslocatorError",
    "Resource",
    "ResourceIndex",
    "ResourceIndexBuilder",
    "ResourceLoadError",
    "ResourceLoader",
    "ResourceLocation",
    "ResourceLocator",
    "RootScanner",
    "ScanCandidate",
    "ScannerConfig",
    "UnresolvableLocationError",
    "bytes_loader",
    "compile_glob",
    "glob_to_regex",
    "json_loader",
    "markdown_loader",
    "parse_properties",
    "properties_loader",
    "text_loader",
    "toml_loader",
]
