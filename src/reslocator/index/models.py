"""Resource, location, and index value types."""

from __future__ import annotations

import io
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from reslocator.index.roots import Root


@dataclass(frozen=True)
class ResourceLocation:
    """
    Reference to one resource inside a root.

    Reading opens the underlying container on demand and releases it
    before returning, so a location never holds an open handle.
    """

    root: Root
    name: str

    @property
    def uri(self) -> str:
        return self.root.entry_uri(self.name)

    def read_bytes(self) -> bytes:
        return self.root.read_entry(self.name)

    def read_text(self, encoding: str = "utf-8") -> str:
        return self.read_bytes().decode(encoding)

    def open(self) -> io.BytesIO:
        return io.BytesIO(self.read_bytes())

    def __str__(self) -> str:
        return self.uri


@dataclass(frozen=True)
class Resource:
    """A `/`-separated resource name and where to read it from."""

    name: str
    location: ResourceLocation


@dataclass(frozen=True)
class ResourceIndex:
    """
    Immutable, ordered collection of resources with unique names.

    When several resources share a name, the first one wins. Nothing
    changes after construction, so an index can be shared freely between
    threads.
    """

    resources: tuple[Resource, ...] = ()
    _by_name: Mapping[str, Resource] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        unique: dict[str, Resource] = {}
        for resource in self.resources:
            unique.setdefault(resource.name, resource)
        object.__setattr__(self, "resources", tuple(unique.values()))
        object.__setattr__(self, "_by_name", MappingProxyType(unique))

    def __iter__(self) -> Iterator[Resource]:
        return iter(self.resources)

    def __len__(self) -> int:
        return len(self.resources)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> Resource | None:
        return self._by_name.get(name)

    def names(self) -> list[str]:
        return [r.name for r in self.resources]
