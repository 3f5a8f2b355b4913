"""
Exception types raised by reslocator.

Each error also derives from the closest built-in exception, so callers
can catch either `ReslocatorError` or the usual `ValueError`/`LookupError`.
"""

from __future__ import annotations


class ReslocatorError(Exception):
    """Base class for all reslocator errors."""


class GlobSyntaxError(ReslocatorError, ValueError):
    """
    A glob pattern could not be compiled.

    `index` is the offset of the offending character in the original pattern.
    """

    def __init__(self, msg: str, pattern: str, index: int) -> None:
        self.msg: str = msg
        self.pattern: str = pattern
        self.index: int = index
        super().__init__(f"{msg} near index {index}: {pattern!r}")


class InvalidRootError(ReslocatorError, ValueError):
    """A root is not a readable directory or archive."""


class NoRootConfiguredError(ReslocatorError, RuntimeError):
    """An index was built before any root was added."""


class UnresolvableLocationError(ReslocatorError, LookupError):
    """A scanned candidate has no usable location."""


class ResourceLoadError(ReslocatorError, RuntimeError):
    """
    A loader failed while reading a located resource.

    The original exception is available as `__cause__`.
    """

    def __init__(self, location: object, cause: BaseException) -> None:
        self.location: object = location
        super().__init__(f"Could not load {location}: {cause}")
