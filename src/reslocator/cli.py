#!/usr/bin/env python3
"""
reslocator: Find resources in directories and archives by glob pattern

Common usage:
  reslocator --root resources 'books/*.properties'
  reslocator --root app.zip --root resources '**.{json,toml}'
  reslocator --root resources --property title 'books/*.properties'
  reslocator --root resources --regex '.*_of_.*'

Patterns are anchored: `*` and `?` stay within one path segment, `**`
crosses `/`, and `{a,b}` matches either alternative.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import re
import sys
from dataclasses import dataclass
from pathlib import Path

from strif import atomic_output_file

from reslocator.config import find_config_file, load_config, merge_cli_with_config
from reslocator.errors import (
    GlobSyntaxError,
    InvalidRootError,
    NoRootConfiguredError,
    ResourceLoadError,
)
from reslocator.index import ScannerConfig
from reslocator.loaders import properties_loader, text_loader
from reslocator.locator import NamePredicate, ResourceLocator
from reslocator.pattern import compile_glob


@dataclass
class Options:
    """Command-line options for the reslocator tool."""

    patterns: list[str]
    roots: list[str]
    regex: str | None
    uri: bool
    cat: bool
    property: str | None
    output: str
    exclude: list[str] | None
    extend_exclude: list[str]
    respect_gitignore: bool
    files_max_size: int
    verbose: bool
    version: bool


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags`
    tracks which config-backed flags the user explicitly passed.
    """
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "patterns",
        nargs="*",
        type=str,
        default=[],
        help="Glob patterns to match resource names against (a name matching any is listed)",
    )
    parser.add_argument(
        "-r",
        "--root",
        action="append",
        default=None,
        dest="roots",
        metavar="PATH",
        help="Directory or zip archive to index. Can be repeated",
    )
    parser.add_argument(
        "--regex",
        type=str,
        default=None,
        metavar="EXPR",
        help="Also list names fully matching this regular expression",
    )
    parser.add_argument("--uri", action="store_true", help="Print resource URIs instead of names")
    parser.add_argument("--cat", action="store_true", help="Print the content of each match")
    parser.add_argument(
        "--property",
        type=str,
        default=None,
        metavar="KEY",
        help="Load matches as .properties files and print the value of KEY for each",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default="-",
        help="Output file (use '-' for stdout)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Replace all default exclusion patterns. Can be repeated",
    )
    parser.add_argument(
        "--extend-exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Add to default exclusion patterns (e.g., 'drafts/'). Can be repeated",
    )
    parser.add_argument(
        "--no-respect-gitignore",
        action="store_true",
        dest="no_respect_gitignore",
        help="Disable .gitignore integration for directory roots",
    )
    parser.add_argument(
        "--files-max-size",
        type=int,
        default=0,
        dest="files_max_size",
        metavar="BYTES",
        help="Skip files larger than this size in bytes (0 = no limit, default: %(default)s)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log scanning details")
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    # Re-parse with sentinel defaults to detect which flags were actually supplied.
    # append actions use None as sentinel (argparse creates a list when the flag is used).
    _SENTINEL = object()
    sentinel_parser = argparse.ArgumentParser(add_help=False)
    sentinel_parser.add_argument("-r", "--root", action="append", dest="roots", default=None)
    sentinel_parser.add_argument("--exclude", action="append", default=None)
    sentinel_parser.add_argument("--extend-exclude", action="append", default=None)
    sentinel_parser.add_argument(
        "--no-respect-gitignore",
        dest="no_respect_gitignore",
        action="store_true",
        default=_SENTINEL,
    )
    sentinel_parser.add_argument(
        "--files-max-size", type=int, dest="files_max_size", default=_SENTINEL
    )
    sentinel_opts, _ = sentinel_parser.parse_known_args(args if args is not None else sys.argv[1:])

    explicit_flags: set[str] = set()
    for dest_name in ("roots", "exclude", "extend_exclude"):
        if getattr(sentinel_opts, dest_name) is not None:
            explicit_flags.add(dest_name)
    if sentinel_opts.no_respect_gitignore is not _SENTINEL:
        explicit_flags.add("respect_gitignore")
    if sentinel_opts.files_max_size is not _SENTINEL:
        explicit_flags.add("files_max_size")

    return (
        Options(
            patterns=opts.patterns,
            roots=opts.roots or [],
            regex=opts.regex,
            uri=opts.uri,
            cat=opts.cat,
            property=opts.property,
            output=opts.output,
            exclude=opts.exclude,
            extend_exclude=opts.extend_exclude,
            respect_gitignore=not opts.no_respect_gitignore,
            files_max_size=opts.files_max_size,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _build_predicate(options: Options) -> NamePredicate:
    """Combine all patterns (and the optional regex) into one name predicate."""
    matchers: list[NamePredicate] = [compile_glob(p) for p in options.patterns]
    if options.regex is not None:
        regex = re.compile(options.regex)
        matchers.append(lambda name: regex.fullmatch(name) is not None)
    return lambda name: any(m(name) for m in matchers)


def _render(locator: ResourceLocator, predicate: NamePredicate, options: Options) -> str:
    """Produce the output text for all matches, in index order."""
    lines: list[str] = []
    if options.property is not None:
        key = options.property
        for outcome in locator.fetch_outcomes(predicate, properties_loader()):
            props = outcome.unwrap()
            if key in props:
                location = outcome.location
                label = location.uri if options.uri else location.name
                lines.append(f"{label}\t{props[key]}")
    elif options.cat:
        lines.extend(text.rstrip("\n") for text in locator.fetch(predicate, text_loader()))
    else:
        for location in locator.locate(predicate):
            lines.append(location.uri if options.uri else location.name)
    return "".join(f"{line}\n" for line in lines)


def _write_output(text: str, output: str) -> None:
    if output == "-":
        sys.stdout.write(text)
        return
    with atomic_output_file(Path(output), make_parents=True) as tmp_path:
        Path(tmp_path).write_text(text, encoding="utf-8")


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the reslocator CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for usage or configuration errors, 2 for other errors)
    """
    options, explicit_flags = _parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if options.version:
        try:
            version = importlib.metadata.version("reslocator")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    try:
        config_path = find_config_file(Path.cwd())
        if config_path:
            merge_cli_with_config(options, load_config(config_path), explicit_flags)
    except (OSError, ValueError) as e:
        print(f"Error: Invalid config file: {e}", file=sys.stderr)
        return 1

    if not options.roots:
        print(
            "Error: No roots specified. Use --root PATH (repeatable) or set `roots` in"
            " a config file. Use --help for more options.",
            file=sys.stderr,
        )
        return 1
    if not options.patterns and options.regex is None:
        print("Error: Provide at least one pattern or --regex.", file=sys.stderr)
        return 1

    scanner_config = ScannerConfig(
        exclude=options.exclude,
        extend_exclude=options.extend_exclude,
        respect_gitignore=options.respect_gitignore,
        files_max_size=options.files_max_size,
    )
    try:
        predicate = _build_predicate(options)
        locator = ResourceLocator.from_paths(options.roots, config=scanner_config)
    except (GlobSyntaxError, re.error, InvalidRootError, NoRootConfiguredError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        _write_output(_render(locator, predicate, options), options.output)
    except ResourceLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        # Catch other potential file or processing errors.
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
