"""
Config files for the `reslocator` command.

A config file is the first of `.reslocator.toml`, `reslocator.toml`, or a
`pyproject.toml` with a `[tool.reslocator]` table, looking in the current
directory and then each parent. Keys may sit at the top level or inside any
table (`[index]`, `[scanning]`), in kebab-case or snake_case:

    roots = ["resources", "vendor/data.zip"]

    [scanning]
    extend-exclude = ["drafts/"]
    respect-gitignore = true
    files-max-size = 0

Unknown keys are ignored. A known key with a value of the wrong type makes the
whole file invalid (`ValueError`), so `roots = "res"` is rejected rather than
read as the roots `r`, `e`, `s`.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeVar, cast

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

TOOL_NAME = "reslocator"


@dataclass
class ReslocatorConfig:
    """
    Settings read from a config file. A field is `None` when the file does not
    set it, so merging can tell "unset" apart from "set to the default".
    """

    roots: list[str] | None = None
    exclude: list[str] | None = None
    extend_exclude: list[str] | None = None
    respect_gitignore: bool | None = None
    files_max_size: int | None = None


def _string_list(key: str, value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"`{key}` must be a list of strings, got {value!r}")
    return cast(list[str], value)


def _boolean(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"`{key}` must be true or false, got {value!r}")
    return value


def _byte_count(key: str, value: Any) -> int:
    # bool is an int subclass; `files-max-size = true` is a mistake, not 1.
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"`{key}` must be a non-negative integer, got {value!r}")
    return value


# One checker per `ReslocatorConfig` field.
_CHECKERS = {
    "roots": _string_list,
    "exclude": _string_list,
    "extend_exclude": _string_list,
    "respect_gitignore": _boolean,
    "files_max_size": _byte_count,
}


def _read_toml(path: Path) -> dict[str, Any]:
    """Parse a TOML file, reporting syntax errors as `ValueError` naming the file."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"{path}: {e}") from e


def _tool_table(data: dict[str, Any]) -> dict[str, Any] | None:
    tool = data.get("tool")
    if not isinstance(tool, dict):
        return None
    table = cast(dict[str, Any], tool).get(TOOL_NAME)
    return cast(dict[str, Any], table) if isinstance(table, dict) else None


def _candidates(directory: Path) -> Iterator[Path]:
    yield directory / f".{TOOL_NAME}.toml"
    yield directory / f"{TOOL_NAME}.toml"
    yield directory / "pyproject.toml"


def find_config_file(start_dir: Path) -> Path | None:
    """
    Return the nearest config file at or above `start_dir`, or `None`. A
    `pyproject.toml` counts only if it parses and has a `[tool.reslocator]` table.
    """
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        for candidate in _candidates(directory):
            if not candidate.is_file():
                continue
            if candidate.name != "pyproject.toml":
                return candidate
            try:
                if _tool_table(_read_toml(candidate)) is not None:
                    return candidate
            except (ValueError, OSError):
                continue
    return None


def load_config(config_path: Path) -> ReslocatorConfig:
    """
    Read and validate a config file. Relative `roots` are resolved against the
    directory holding the file, so a config works from any subdirectory.

    Raises `ValueError` for bad TOML or badly typed values, `OSError` if the
    file cannot be read.
    """
    data = _read_toml(config_path)
    if config_path.name == "pyproject.toml":
        data = _tool_table(data) or {}

    try:
        config = _parse_config_data(data)
    except ValueError as e:
        raise ValueError(f"{config_path}: {e}") from e

    if config.roots is not None:
        base = config_path.resolve().parent
        config.roots = [str(base / root) for root in config.roots]
    return config


def _flatten(data: dict[str, Any]) -> Iterator[tuple[str, Any]]:
    """Yield top-level keys and the keys of each table, one level deep."""
    for key, value in data.items():
        if isinstance(value, dict):
            yield from cast(dict[str, Any], value).items()
        else:
            yield key, value


def _parse_config_data(data: dict[str, Any]) -> ReslocatorConfig:
    values: dict[str, Any] = {}
    for key, value in _flatten(data):
        name = key.replace("-", "_")
        checker = _CHECKERS.get(name)
        if checker is not None:
            values[name] = checker(key, value)
    return ReslocatorConfig(**values)


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: ReslocatorConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Copy config values onto `cli_opts`, except where a flag was given on the
    command line. Precedence: explicit flags, then config, then defaults.
    """
    if config is None:
        return cli_opts
    for name in _CHECKERS:
        value = getattr(config, name)
        if value is None or name in explicit_flags or not hasattr(cli_opts, name):
            continue
        setattr(cli_opts, name, value)
    return cli_opts
