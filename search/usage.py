"""
Find files that mention a term.

Plain substring match, no regex. Walks the tree once, skipping build
output and dependency directories.
"""

import fnmatch
import logging
import os
from pathlib import Path
from typing import Iterable

log = logging.getLogger(__name__)

DEFAULT_PATTERNS = ("*.ts", "*.tsx", "*.js", "*.jsx")
EXCLUDED_DIRS = frozenset({"node_modules", ".next", "dist", "build", ".git"})


def find_usages(
    term: str,
    root: str | Path = ".",
    patterns: Iterable[str] = DEFAULT_PATTERNS,
) -> list[Path]:
    """
    Return files under root whose contents contain term.

    Args:
        term: Exact substring to look for. Must be non-empty.
        root: Directory to search (default: current directory).
        patterns: Filename globs; a file is searched if any one matches.

    Returns:
        Matching paths, sorted, each prefixed by root as given.

    Raises:
        ValueError: Empty term or root is not a directory.
    """
    if not term:
        raise ValueError("Search term must not be empty")
    root = Path(root)
    if not root.is_dir():
        raise ValueError(f"Not a directory: {root}")

    patterns = tuple(patterns) or DEFAULT_PATTERNS
    matches: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        # Prune in place so os.walk never descends into excluded dirs
        dirnames[:] = [d for d in dirnames if d not in EXCLUDED_DIRS]
        for filename in filenames:
            if not any(fnmatch.fnmatch(filename, p) for p in patterns):
                continue
            path = Path(dirpath) / filename
            if _contains(path, term):
                matches.append(path)

    log.debug(f"Searched {root} for '{term}': {len(matches)} files")
    return sorted(matches)


def _contains(path: Path, term: str) -> bool:
    try:
        text = path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        log.warning(f"Skipping unreadable file {path}: {e}")
        return False
    return term in text
