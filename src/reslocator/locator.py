"""
ResourceLocator: read-only queries over a built `ResourceIndex`.

Queries are either glob patterns (see `reslocator.pattern`) or arbitrary
name predicates. Results are lazy iterators: nothing is matched or loaded
until the consumer asks for the next element, and each call starts a fresh
pass over the index.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Generic, TypeVar

from reslocator.errors import ResourceLoadError
from reslocator.index.builder import ResourceIndexBuilder
from reslocator.index.models import ResourceIndex, ResourceLocation
from reslocator.index.types import ScannerConfig
from reslocator.loaders import RECOVERABLE_LOAD_ERRORS, ResourceLoader
from reslocator.pattern import compile_glob

T = TypeVar("T")

NamePredicate = Callable[[str], bool]
Query = str | NamePredicate


@dataclass(frozen=True)
class LoadOutcome(Generic[T]):
    """The result of loading one location: either a value or the error raised."""

    location: ResourceLocation
    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise `ResourceLoadError` caused by the error."""
        if self.error is not None:
            raise ResourceLoadError(self.location, self.error) from self.error
        return self.value  # pyright: ignore[reportReturnType]


def _to_predicate(query: Query) -> NamePredicate:
    if isinstance(query, str):
        return compile_glob(query)
    if callable(query):
        return query
    raise TypeError(f"Query must be a glob string or a callable, not {type(query).__name__}")


class ResourceLocator:
    """
    Query facade over an immutable index. Holds no other state, so it can be
    queried repeatedly and from several threads.
    """

    def __init__(self, index: ResourceIndex) -> None:
        self._index: ResourceIndex = index

    @classmethod
    def from_paths(
        cls, paths: Iterable[str | Path], config: ScannerConfig | None = None
    ) -> ResourceLocator:
        """Build an index from directories and/or archives and wrap it."""
        builder = ResourceIndexBuilder(config=config)
        for path in paths:
            builder.add_path(path)
        return cls(builder.build())

    @property
    def index(self) -> ResourceIndex:
        return self._index

    def locate(self, query: Query) -> Iterator[ResourceLocation]:
        """
        Yield the location of every resource whose name matches `query`, in
        index order. Glob syntax errors are raised here, not on iteration.
        """
        predicate = _to_predicate(query)
        return (r.location for r in self._index if predicate(r.name))

    def fetch_outcomes(self, query: Query, loader: ResourceLoader[T]) -> Iterator[LoadOutcome[T]]:
        """
        Like `fetch`, but recoverable loader failures are returned as
        `LoadOutcome` errors instead of being raised.
        """
        locations = self.locate(query)
        return (_load(location, loader) for location in locations)

    def fetch(self, query: Query, loader: ResourceLoader[T]) -> Iterator[T]:
        """
        Yield `loader(location)` for every match, loading on demand.

        A recoverable loader failure raises `ResourceLoadError` at the element
        that failed and ends the iteration; earlier elements are unaffected.
        """
        return (outcome.unwrap() for outcome in self.fetch_outcomes(query, loader))


def _load(location: ResourceLocation, loader: ResourceLoader[T]) -> LoadOutcome[T]:
    try:
        return LoadOutcome(location=location, value=loader(location))
    except RECOVERABLE_LOAD_ERRORS as e:
        return LoadOutcome(location=location, error=e)
