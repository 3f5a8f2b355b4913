"""
Glob pattern compiler for resource names.

Patterns are matched against `/`-separated resource names and are always
anchored: the whole name must match.

Syntax:
- `\\c` matches the character `c` literally (a trailing `\\` is an error)
- `?` matches exactly one character other than `/`
- `*` matches any run of characters other than `/`
- `**` matches any run of characters, including `/`
- `{a,b,c}` matches any one of the comma-separated alternatives
  (groups cannot be nested; a stray `}` outside a group is literal)
- Every other character matches itself

Usage:
    from reslocator.pattern import compile_glob

    matcher = compile_glob("books/*.{properties,toml}")
    matcher("books/a_game_of_thrones.properties")  # True
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from reslocator.errors import GlobSyntaxError


class GroupState(str, Enum):
    """Whether the translator is currently inside a `{...}` group."""

    outside = "outside"
    inside = "inside"


@dataclass
class _Translation:
    """Cursor over the glob plus the regex fragments emitted so far."""

    pattern: str
    pos: int = 0
    parts: list[str] = field(default_factory=list)

    def at_end(self) -> bool:
        return self.pos >= len(self.pattern)

    def next_char(self) -> str:
        c = self.pattern[self.pos]
        self.pos += 1
        return c

    def peek(self) -> str | None:
        return self.pattern[self.pos] if self.pos < len(self.pattern) else None

    @property
    def index(self) -> int:
        """Index of the most recently consumed character."""
        return self.pos - 1

    def emit(self, fragment: str) -> None:
        self.parts.append(fragment)


_Handler = Callable[[_Translation, GroupState], GroupState]


def _literal(t: _Translation, state: GroupState) -> GroupState:
    t.emit(re.escape(t.pattern[t.index]))
    return state


def _escape(t: _Translation, state: GroupState) -> GroupState:
    if t.at_end():
        raise GlobSyntaxError("No character to escape", t.pattern, t.index)
    t.emit(re.escape(t.next_char()))
    return state


def _separator(t: _Translation, state: GroupState) -> GroupState:
    t.emit("/")
    return state


def _star(t: _Translation, state: GroupState) -> GroupState:
    if t.peek() == "*":
        t.next_char()
        t.emit(".*")
    else:
        t.emit("[^/]*")
    return state


def _question(t: _Translation, state: GroupState) -> GroupState:
    t.emit("[^/]")
    return state


def _open_group(t: _Translation, state: GroupState) -> GroupState:
    t.emit("(?:")
    return GroupState.inside


def _nested_group(t: _Translation, state: GroupState) -> GroupState:
    raise GlobSyntaxError("Cannot nest groups", t.pattern, t.index)


def _alternative(t: _Translation, state: GroupState) -> GroupState:
    t.emit("|")
    return state


def _close_group(t: _Translation, state: GroupState) -> GroupState:
    t.emit(")")
    return GroupState.outside


# (character, state) -> handler. Anything not listed is a literal.
_TRANSITIONS: dict[tuple[str, GroupState], _Handler] = {
    ("{", GroupState.outside): _open_group,
    ("{", GroupState.inside): _nested_group,
    (",", GroupState.inside): _alternative,
    ("}", GroupState.inside): _close_group,
}
for _state in GroupState:
    _TRANSITIONS[("\\", _state)] = _escape
    _TRANSITIONS[("/", _state)] = _separator
    _TRANSITIONS[("*", _state)] = _star
    _TRANSITIONS[("?", _state)] = _question
del _state


def glob_to_regex(pattern: str) -> str:
    """
    Translate a glob into an (unanchored) regular expression body.

    Raises `GlobSyntaxError` with the offending index in `pattern`.
    """
    t = _Translation(pattern)
    state = GroupState.outside
    while not t.at_end():
        c = t.next_char()
        state = _TRANSITIONS.get((c, state), _literal)(t, state)
    if state is GroupState.inside:
        raise GlobSyntaxError("Missing closing brace", pattern, len(pattern) - 1)
    return "".join(t.parts)


@dataclass(frozen=True)
class GlobMatcher:
    """
    A compiled glob. Calling it tests a whole resource name.

    Holds no mutable state, so one instance can be shared between threads.
    """

    pattern: str
    regex: re.Pattern[str]

    def __call__(self, name: str) -> bool:
        return self.regex.fullmatch(name) is not None


def compile_glob(pattern: str) -> GlobMatcher:
    """Compile `pattern` into a `GlobMatcher`."""
    return GlobMatcher(pattern=pattern, regex=re.compile(glob_to_regex(pattern), re.DOTALL))
