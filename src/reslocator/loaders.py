"""
Loaders turn a located resource into a typed value.

A loader is any callable taking a `ResourceLocation` and returning a value.
Loaders signal ordinary read and decode problems by raising `OSError` or
`ValueError` (which covers `UnicodeDecodeError`, `json.JSONDecodeError`
and `tomllib.TOMLDecodeError`). `ResourceLocator.fetch` wraps those in
`ResourceLoadError`; anything else propagates unchanged.
"""

from __future__ import annotations

import json
import re
import sys
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

import marko
from marko.block import Document

from reslocator.index.models import ResourceLocation

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

T_co = TypeVar("T_co", covariant=True)

# Exceptions a loader may raise for an unreadable or malformed resource.
RECOVERABLE_LOAD_ERRORS: tuple[type[Exception], ...] = (OSError, ValueError)


class ResourceLoader(Protocol[T_co]):
    """Decodes the content at a location into a value."""

    def __call__(self, location: ResourceLocation, /) -> T_co: ...


def bytes_loader(location: ResourceLocation) -> bytes:
    return location.read_bytes()


def text_loader(encoding: str = "utf-8") -> Callable[[ResourceLocation], str]:
    def load(location: ResourceLocation) -> str:
        return location.read_text(encoding)

    return load


def json_loader(location: ResourceLocation) -> Any:
    return json.loads(location.read_bytes())


def toml_loader(location: ResourceLocation) -> dict[str, Any]:
    return tomllib.loads(location.read_text("utf-8"))


def markdown_loader(location: ResourceLocation) -> Document:
    """Parse a Markdown resource into a Marko document tree."""
    return marko.parse(location.read_text("utf-8"))


def properties_loader(encoding: str = "utf-8") -> Callable[[ResourceLocation], dict[str, str]]:
    """Loader for Java-style `.properties` files."""

    def load(location: ResourceLocation) -> dict[str, str]:
        return parse_properties(location.read_text(encoding))

    return load


# === Properties Format ===

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_SEPARATORS = "=:"
_WHITESPACE = " \t\f"
# Only CR, LF and CRLF end a line; `str.splitlines()` would also split at \f and \x85.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _logical_lines(text: str) -> list[str]:
    """
    Join continuation lines (ending in an odd number of backslashes) and drop
    comments and blank lines. Leading whitespace of continued lines is removed.
    """
    result: list[str] = []
    pending: str | None = None
    for raw in _LINE_BREAK.split(text):
        line = raw.lstrip(_WHITESPACE)
        if pending is None and (not line or line[0] in "#!"):
            continue
        trailing = len(line) - len(line.rstrip("\\"))
        continued = trailing % 2 == 1
        if continued:
            line = line[:-1]
        pending = line if pending is None else pending + line
        if not continued:
            result.append(pending)
            pending = None
    if pending is not None:
        result.append(pending)
    return result


def _unescape(s: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(s):
        c = s[i]
        if c != "\\" or i + 1 >= len(s):
            out.append(c)
            i += 1
            continue
        nxt = s[i + 1]
        if nxt == "u":
            code = s[i + 2 : i + 6]
            if len(code) < 4:
                raise ValueError(f"Malformed \\uXXXX escape: {s[i:]!r}")
            try:
                out.append(chr(int(code, 16)))
            except ValueError as e:
                raise ValueError(f"Malformed \\uXXXX escape: \\u{code}") from e
            i += 6
        else:
            out.append(_ESCAPES.get(nxt, nxt))
            i += 2
    return "".join(out)


def _split_key_value(line: str) -> tuple[str, str]:
    """Split at the first unescaped `=`, `:` or whitespace."""
    i = 0
    while i < len(line):
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in _SEPARATORS or c in _WHITESPACE:
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def parse_properties(text: str) -> dict[str, str]:
    """
    Parse `.properties` text into a dict. Later keys override earlier ones.

    Supports `=`, `:` and whitespace separators, `#` and `!` comments,
    backslash line continuations, and `\\t \\n \\r \\f \\\\ \\uXXXX` escapes.
    """
    props: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_key_value(line)
        props[_unescape(key)] = _unescape(value)
    return props
