"""Gitignore and tool-specific ignore file handling using pathspec."""

from __future__ import annotations

from pathlib import Path

import pathspec


def _read_ignore_file(path: Path) -> list[str]:
    """Read non-blank, non-comment lines from an ignore file."""
    lines = path.read_text(encoding="utf-8").splitlines()
    return [line for line in lines if line.strip() and not line.strip().startswith("#")]


def load_gitignore(directory: Path) -> pathspec.PathSpec | None:
    """
    Read `.gitignore` in the given directory and return a compiled `PathSpec`,
    or `None` if the file doesn't exist or is empty.
    """
    gitignore = directory / ".gitignore"
    if not gitignore.is_file():
        return None
    lines = _read_ignore_file(gitignore)
    if not lines:
        return None
    return pathspec.PathSpec.from_lines("gitignore", lines)


def load_tool_ignore(tool_name: str, root: Path) -> pathspec.PathSpec | None:
    """
    Read `.{tool_name}ignore` (e.g., `.reslocatorignore`) at the top of a
    directory root. Patterns are relative to the root.
    """
    candidate = root / f".{tool_name}ignore"
    if not candidate.is_file():
        return None
    lines = _read_ignore_file(candidate)
    if not lines:
        return None
    return pathspec.PathSpec.from_lines("gitignore", lines)
