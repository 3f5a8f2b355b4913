"""Configuration types for root scanning."""

from __future__ import annotations

from dataclasses import dataclass, field

from reslocator.index.defaults import DEFAULT_EXCLUDES


@dataclass
class ScannerConfig:
    """
    Configuration for enumerating resources under roots.

    `tool_name` determines the ignore file name (e.g., `.reslocatorignore`).
    `exclude=None` means use `DEFAULT_EXCLUDES`; providing a list replaces them entirely.
    `files_max_size=0` disables the size limit.
    """

    tool_name: str = "reslocator"
    exclude: list[str] | None = None
    extend_exclude: list[str] = field(default_factory=list)
    respect_gitignore: bool = True
    files_max_size: int = 0

    @property
    def effective_exclude(self) -> list[str]:
        """Combined exclude patterns: defaults (or `exclude`) + `extend_exclude`."""
        base = self.exclude if self.exclude is not None else list(DEFAULT_EXCLUDES)
        return base + self.extend_exclude
