"""
Recursive discovery of the files to flatten.

The walk is depth-first and keeps the order returned by the directory
listing. That order decides which file keeps the unsuffixed name when two
files collide, so it is never sorted.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Set

from media_flattener.errors import TraversalError
from media_flattener.models.enums import EntryKind
from media_flattener.models.record import FileRecord
from media_flattener.scanner.patterns import classify_entry

logger = logging.getLogger(__name__)


def walk(directory: Path, exclude: Iterable[Path] = ()) -> List[FileRecord]:
    """
    Collect every processable file below a directory.

    Args:
        directory: Root of the tree to walk
        exclude: Directories never descended into (e.g. an output folder
                 that lives inside the input root)

    Returns:
        List of FileRecord in traversal order, without timestamps or targets

    Raises:
        TraversalError: If any directory in the tree cannot be listed.
                        No partial result is returned.
    """
    excluded = {_normalize(path) for path in exclude}
    records: List[FileRecord] = []
    _walk_into(Path(directory), excluded, records)
    logger.debug("Walked %s: %d files", directory, len(records))
    return records


def _walk_into(directory: Path, excluded: Set[Path], records: List[FileRecord]) -> None:
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise TraversalError(directory, e.strerror or str(e)) from e

    for entry in entries:
        kind = classify_entry(entry.name)

        if kind is EntryKind.SKIP:
            logger.debug("Skipping %s", entry)
            continue

        if kind is EntryKind.DIRECTORY:
            if _normalize(entry) in excluded:
                logger.debug("Not descending into excluded directory %s", entry)
                continue
            _walk_into(entry, excluded, records)
            continue

        records.append(FileRecord(source_path=entry, source_dir=directory))


def _normalize(path: Path) -> Path:
    return Path(path).expanduser().resolve()
