"""Scanner module for discovering the files to flatten."""

from media_flattener.scanner.patterns import SKIP_NAMES, classify_entry
from media_flattener.scanner.walker import walk

__all__ = [
    "SKIP_NAMES",
    "classify_entry",
    "walk",
]
