"""
Default exclusion patterns for scanning directory roots.

These patterns use gitignore syntax. Directory patterns end with `/`.
"""

from __future__ import annotations

# Directories that never hold resources worth indexing.
# Pruned during directory traversal (not entered at all).
DEFAULT_EXCLUDES: list[str] = [
    # Version control
    ".git/",
    ".hg/",
    ".svn/",
    ".bzr/",
    # Python
    ".venv/",
    "__pycache__/",
    ".tox/",
    ".nox/",
    ".mypy_cache/",
    ".ruff_cache/",
    ".pytest_cache/",
    ".eggs/",
    "*.pyc",
    # JavaScript/Node
    "node_modules/",
    # IDE/Editor
    ".idea/",
    ".vscode/",
    # OS metadata
    ".DS_Store",
]
