"""Data models for media-flattener."""

from media_flattener.models.enums import EntryKind, FileFormat, FileStatus, TransferAction
from media_flattener.models.record import FileRecord, TransferResult

__all__ = [
    "EntryKind",
    "FileFormat",
    "FileRecord",
    "FileStatus",
    "TransferAction",
    "TransferResult",
]
