"""
Transfer of resolved files into the output folder.

Two passes run over the whole batch, one after the other:

Pass 1 (transfer): HEIC-family files are transcoded to JPEG, everything
else is copied byte for byte.
Pass 2 (resize, optional): every JPEG in the output is downsampled to a
fixed width. Narrower images are left as they are.

Each step reports one unit of progress, whether it succeeds, fails or has
nothing to do. Failures are logged and recorded on the record; the
remaining files are still processed.
"""

import logging
import os
import shutil
from typing import List, Optional, Set

from media_flattener.errors import ResizeError, TransferError
from media_flattener.models.enums import FileStatus, TransferAction
from media_flattener.models.record import FileRecord, TransferResult
from media_flattener.naming.resolver import disambiguate
from media_flattener.progress import ProgressReporter
from media_flattener.transfer.images import (
    DEFAULT_JPEG_QUALITY,
    DEFAULT_RESIZE_WIDTH,
    IMAGE_ERRORS,
    convert_to_jpeg,
    resize_to_width,
)

logger = logging.getLogger(__name__)

JPEG_EXTENSION = ".jpg"


class TransferEngine:
    """
    Performs the side effects for each resolved record.

    Args:
        claimed: Paths claimed by the resolver. Converted files are
                 re-claimed here when their extension changes.
        jpeg_quality: Quality used for every JPEG written
        resize_width: Target width of the resize pass
        progress: Reporter incremented once per step
    """

    def __init__(
        self,
        claimed: Optional[Set[str]] = None,
        jpeg_quality: int = DEFAULT_JPEG_QUALITY,
        resize_width: int = DEFAULT_RESIZE_WIDTH,
        progress: Optional[ProgressReporter] = None,
    ):
        self.claimed = claimed if claimed is not None else set()
        self.jpeg_quality = jpeg_quality
        self.resize_width = resize_width
        self.progress = progress or ProgressReporter()

    def transfer(self, record: FileRecord) -> TransferResult:
        """Copy or convert one record. Never raises for per-file failures."""
        try:
            if record.failed or record.target_path is None:
                return TransferResult(record, None, success=False, error=record.error,
                                      changed=False, skipped=True)

            if record.format.is_heic_family:
                record.action = TransferAction.CONVERT
                self._convert(record)
            else:
                record.action = TransferAction.COPY
                self._copy(record)
        except TransferError as e:
            logger.error("Failed to transfer %s: %s", record.source_path, e.reason)
            record.fail(str(e))
            return TransferResult(record, record.action, success=False, error=str(e))
        finally:
            self.progress.increment()

        record.status = FileStatus.TRANSFERRED
        return TransferResult(record, record.action, success=True)

    def resize(self, record: FileRecord) -> TransferResult:
        """
        Downsample one transferred JPEG in place.

        Records that failed earlier or are not JPEGs are passed over, but
        still count as one unit of progress.
        """
        try:
            if record.failed or not self.is_resizable(record):
                return TransferResult(record, record.action, success=not record.failed,
                                      error=record.error, changed=False, skipped=True)

            try:
                changed = resize_to_width(record.target_path, self.resize_width, self.jpeg_quality)
            except IMAGE_ERRORS as e:
                error = ResizeError(record.source_path, str(e), target=record.target_path)
                # The un-resized copy stays in the output folder
                logger.error("Failed to resize %s: %s", record.target_path, e)
                record.fail(str(error))
                return TransferResult(record, record.action, success=False, error=str(error))
        finally:
            self.progress.increment()

        if changed:
            record.status = FileStatus.RESIZED
        return TransferResult(record, record.action, success=True, changed=changed)

    def transfer_all(self, records: List[FileRecord]) -> List[TransferResult]:
        return [self.transfer(record) for record in records]

    def resize_all(self, records: List[FileRecord]) -> List[TransferResult]:
        return [self.resize(record) for record in records]

    @staticmethod
    def is_resizable(record: FileRecord) -> bool:
        return record.target_path is not None and record.target_path.suffix == JPEG_EXTENSION

    def _copy(self, record: FileRecord) -> None:
        target = record.target_path
        temp_path = target.with_name(target.name + ".part")
        try:
            shutil.copy2(record.source_path, temp_path)
            os.replace(temp_path, target)
        except OSError as e:
            raise TransferError(record.source_path, e.strerror or str(e), target=target) from e
        finally:
            if temp_path.exists():
                temp_path.unlink()
        logger.debug("Copied %s -> %s", record.source_path, target.name)

    def _convert(self, record: FileRecord) -> None:
        target = record.target_path
        if target.suffix != JPEG_EXTENSION:
            # The original path stays claimed; the JPEG path must be unique too
            target = disambiguate(target.with_suffix(JPEG_EXTENSION), self.claimed)

        try:
            convert_to_jpeg(record.source_path, target, self.jpeg_quality)
        except IMAGE_ERRORS as e:
            raise TransferError(record.source_path, str(e), target=target) from e

        record.target_path = target
        logger.debug("Converted %s -> %s", record.source_path, target.name)


def finalize(records: List[FileRecord]) -> None:
    """Move every record that survived both passes to DONE."""
    for record in records:
        if record.status in (FileStatus.TRANSFERRED, FileStatus.RESIZED):
            record.status = FileStatus.DONE
