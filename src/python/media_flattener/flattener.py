"""
Module for flattening a tree of media files into one folder.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd

from media_flattener.models.enums import TransferAction
from media_flattener.models.record import FileRecord
from media_flattener.naming.resolver import resolve
from media_flattener.progress import ProgressReporter
from media_flattener.scanner.walker import walk
from media_flattener.transfer.engine import TransferEngine, finalize
from media_flattener.transfer.images import DEFAULT_JPEG_QUALITY, DEFAULT_RESIZE_WIDTH
from media_flattener.utils import ensure_directory

logger = logging.getLogger(__name__)


class FlattenResult:
    """Track results of a flatten run."""
    def __init__(self):
        self.found = 0
        self.copied = 0
        self.converted = 0
        self.resized = 0
        self.records: List[FileRecord] = []
        self.errors: List[Tuple[Path, str]] = []

    @property
    def failed(self) -> int:
        return len(self.errors)

    def add_error(self, file_path: Path, error: str):
        self.errors.append((file_path, error))

    def to_dataframe(self) -> pd.DataFrame:
        """One row per discovered file, in traversal order."""
        if not self.records:
            return pd.DataFrame()
        return pd.DataFrame([record.to_dict() for record in self.records])

    def __str__(self):
        return (
            f"Found {self.found} files. "
            f"Copied {self.copied}. "
            f"Converted {self.converted}. "
            f"Resized {self.resized}. "
            f"Failed {self.failed}."
        )


def flatten_directory(
    input_root: Path,
    output_dir: Path,
    resize: bool = False,
    resize_width: int = DEFAULT_RESIZE_WIDTH,
    jpeg_quality: int = DEFAULT_JPEG_QUALITY,
    progress: Optional[ProgressReporter] = None,
) -> FlattenResult:
    """
    Copy every media file below input_root into output_dir under a
    canonical, collision-free name.

    Phases run strictly one after the other: walk, resolve, transfer,
    then (optionally) resize.

    Args:
        input_root: Directory tree to read from
        output_dir: Flat folder to write to, created if missing
        resize: If True, downsample JPEG output to resize_width
        resize_width: Target width for the resize pass
        jpeg_quality: JPEG quality for converted and resized files
        progress: Receives start(total), increment() and stop()

    Returns:
        FlattenResult with counts and per-file errors.

    Raises:
        FileNotFoundError: If input_root does not exist
        NotADirectoryError: If input_root or output_dir is not a directory
        TraversalError: If a directory in the tree cannot be read
    """
    input_root = Path(input_root).expanduser().resolve()
    output_dir = Path(output_dir).expanduser().resolve()
    progress = progress or ProgressReporter()
    result = FlattenResult()

    if not input_root.exists():
        raise FileNotFoundError(f"Input directory not found: {input_root}")
    if not input_root.is_dir():
        raise NotADirectoryError(f"Not a directory: {input_root}")

    ensure_directory(output_dir)

    logger.info("Finding files in %s", input_root)
    records = walk(input_root, exclude=[output_dir])
    result.records = records
    result.found = len(records)
    logger.info("Found %d files to copy", result.found)

    claimed = resolve(records, input_root, output_dir)
    for record in records:
        if record.failed:
            result.add_error(record.source_path, record.error)

    engine = TransferEngine(
        claimed=claimed,
        jpeg_quality=jpeg_quality,
        resize_width=resize_width,
        progress=progress,
    )

    passes = 2 if resize else 1
    progress.start(len(records) * passes)
    try:
        logger.info("Copying files to %s", output_dir)
        for transferred in engine.transfer_all(records):
            if transferred.skipped:
                continue
            if not transferred.success:
                result.add_error(transferred.record.source_path, transferred.error)
            elif transferred.action is TransferAction.CONVERT:
                result.converted += 1
            else:
                result.copied += 1

        if resize:
            logger.info("Resizing images to %dpx wide", resize_width)
            for resized in engine.resize_all(records):
                if resized.skipped:
                    continue
                if not resized.success:
                    result.add_error(resized.record.source_path, resized.error)
                elif resized.changed:
                    result.resized += 1
    finally:
        progress.stop()

    finalize(records)
    logger.info("Finished: %s", result)
    return result
