"""
Target path resolution and batch-wide deduplication.

Resolution happens in two steps over the whole batch:

1. assign_target_paths() reads each file's creation time and builds its
   preferred target path.
2. deduplicate() walks the records in traversal order and claims each path
   in an explicit `seen` set. A path that is already claimed gets a
   disambiguator inserted before its extension: -02, -03, ...

The first file in traversal order always keeps the unsuffixed name, and a
claimed path is never released, even when the file later fails to copy.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Set

from media_flattener.errors import StatError
from media_flattener.models.enums import FileStatus
from media_flattener.models.record import FileRecord
from media_flattener.naming.translator import build_target_name, format_group_name

logger = logging.getLogger(__name__)

FIRST_DISAMBIGUATOR = 2


def file_birthtime(path: Path) -> datetime:
    """
    Get the creation time of a file as a local datetime.

    Uses st_birthtime where the platform reports it (macOS, BSD, Windows).
    Elsewhere the modification time is used, since st_ctime on Linux is the
    inode change time and moves on every copy.

    Raises:
        StatError: If the file metadata cannot be read
    """
    try:
        stats = path.stat()
    except OSError as e:
        raise StatError(path, e.strerror or str(e)) from e

    timestamp = getattr(stats, "st_birthtime", None)
    if timestamp is None:
        timestamp = stats.st_mtime
    return datetime.fromtimestamp(timestamp)


def assign_target_paths(
    records: List[FileRecord],
    input_root: Path,
    output_dir: Path,
) -> List[FileRecord]:
    """
    Build the preferred target path of every record.

    A record whose metadata cannot be read is marked FAILED and gets no
    target; the rest of the batch is unaffected.

    Args:
        records: Records from the walker, in traversal order
        input_root: Input root, stripped from folder lineage
        output_dir: Flat output folder

    Returns:
        The same list, updated in place
    """
    for record in records:
        try:
            record.birthtime = file_birthtime(record.source_path)
        except StatError as e:
            logger.error("Cannot read metadata of %s: %s", record.source_path, e.reason)
            record.fail(str(e))
            continue

        group_name = format_group_name(record.source_dir, input_root)
        name = build_target_name(record.birthtime, group_name, record.source_path.suffix)
        record.target_path = Path(output_dir) / name
        record.status = FileStatus.RESOLVED

    return records


def disambiguate(path: Path, seen: Set[str]) -> Path:
    """
    Claim a path in `seen`, inserting a disambiguator if it is taken.

    The disambiguator is at least two digits wide and grows past 99
    without a cap (-99, -100, ...).

    Example:
        >>> seen = {"out/2024-05-01-10-00-00-000.jpg"}
        >>> disambiguate(Path("out/2024-05-01-10-00-00-000.jpg"), seen)
        PosixPath('out/2024-05-01-10-00-00-000-02.jpg')
    """
    path = Path(path)
    if os.fspath(path) not in seen:
        seen.add(os.fspath(path))
        return path

    n = FIRST_DISAMBIGUATOR
    while True:
        candidate = path.with_name(f"{path.stem}-{n:02d}{path.suffix}")
        if os.fspath(candidate) not in seen:
            seen.add(os.fspath(candidate))
            return candidate
        n += 1


def deduplicate(records: List[FileRecord], seen: Optional[Set[str]] = None) -> Set[str]:
    """
    Make every target path in the batch unique.

    Args:
        records: Records in traversal order. Failed records are ignored.
        seen: Paths already claimed. A new set is used when None.

    Returns:
        The set of claimed paths, for claims made after resolution
    """
    if seen is None:
        seen = set()

    for record in records:
        if record.failed or record.target_path is None:
            continue

        resolved = disambiguate(record.target_path, seen)
        if resolved != record.target_path:
            logger.debug("Name collision: %s -> %s", record.target_path.name, resolved.name)
            record.target_path = resolved

    return seen


def resolve(
    records: List[FileRecord],
    input_root: Path,
    output_dir: Path,
    seen: Optional[Set[str]] = None,
) -> Set[str]:
    """Assign target paths, then deduplicate them. Returns the claimed paths."""
    assign_target_paths(records, input_root, output_dir)
    return deduplicate(records, seen)
