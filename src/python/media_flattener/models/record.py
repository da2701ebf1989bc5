"""
FileRecord and TransferResult models.

A FileRecord is one discovered input file destined for the output folder.
It is created by the walker, given a target path by the resolver, and
updated by the transfer engine. Nothing is persisted between runs.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from media_flattener.models.enums import FileFormat, FileStatus, TransferAction


@dataclass
class FileRecord:
    """
    Represents a single file moving through the batch.

    Attributes:
        source_path: Absolute path of the input file
        source_dir: Immediate containing directory, used for the group name
        target_path: Output path. Set by the resolver, may be rewritten by
                     deduplication and by HEIC conversion.
        birthtime: Creation timestamp, read when the target is first built
        status: Where the file is in its lifecycle
        action: Copy or convert, decided by the transfer pass
        error: Message of the per-file failure, if any
    """
    source_path: Path
    source_dir: Path
    target_path: Optional[Path] = None
    birthtime: Optional[datetime] = None
    status: FileStatus = FileStatus.DISCOVERED
    action: Optional[TransferAction] = None
    error: Optional[str] = None

    @property
    def format(self) -> FileFormat:
        return FileFormat.from_filename(self.source_path.name)

    @property
    def failed(self) -> bool:
        return self.status is FileStatus.FAILED

    def fail(self, error: str) -> None:
        """Mark this record as failed. Its claimed target is never released."""
        self.status = FileStatus.FAILED
        self.error = error

    def to_dict(self) -> dict:
        """Convert to dictionary for pandas DataFrame."""
        return {
            "source_path": str(self.source_path),
            "source_dir": str(self.source_dir),
            "target_path": str(self.target_path) if self.target_path else None,
            "birthtime": self.birthtime,
            "format": self.format.value,
            "status": self.status.name,
            "action": self.action.name if self.action else None,
            "error": self.error,
        }


@dataclass(frozen=True)
class TransferResult:
    """Outcome of one transfer or resize step for one record."""
    record: FileRecord
    action: Optional[TransferAction]
    success: bool
    error: Optional[str] = None
    changed: bool = True  # False when a resize left the image untouched
    skipped: bool = False  # True when the step had nothing to do for this record
