"""
Output delivery. Generated text goes to stdout, diagnostics to stderr.

stdout carries nothing else so `ask ... | other-tool` stays clean.
"""

import sys
from pathlib import Path
from typing import Iterable, TextIO


def deliver_cli(text: str, stream: TextIO | None = None):
    """Print the provider's text as-is."""
    stream = stream or sys.stdout
    stream.write(text)
    if not text.endswith("\n"):
        stream.write("\n")
    stream.flush()


def deliver_paths(paths: Iterable[Path], stream: TextIO | None = None) -> int:
    """One path per line. Returns how many were printed."""
    stream = stream or sys.stdout
    count = 0
    for path in paths:
        print(path, file=stream)
        count += 1
    return count


def report_error(message: str, stream: TextIO | None = None):
    print(f"Error: {message}", file=stream or sys.stderr)
