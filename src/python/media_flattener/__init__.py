"""
media-flattener - Flatten a tree of photos and videos into one folder.

Every file gets a canonical, collision-free name built from its creation
time and the folders it came from:

    Wedding/Ceremony/Photos/IMG_0001.JPEG -> 2024-05-01-10-00-00-000-ceremony-photos.jpg

HEIC files are converted to JPEG, and JPEG output can optionally be
downsampled to a fixed width.

Usage:
    from pathlib import Path
    from media_flattener import flatten_directory

    result = flatten_directory(Path("/photos/Wedding"), Path("./output"), resize=True)
    print(result)
"""

from media_flattener.__version__ import __version__
from media_flattener.errors import (
    MediaFlattenerError,
    ResizeError,
    StatError,
    TransferError,
    TraversalError,
)
from media_flattener.flattener import FlattenResult, flatten_directory
from media_flattener.models import FileFormat, FileRecord, FileStatus, TransferAction, TransferResult
from media_flattener.naming import (
    deduplicate,
    format_group_name,
    format_timestamp,
    normalize_extension,
    resolve,
)
from media_flattener.scanner import walk
from media_flattener.transfer import TransferEngine

__all__ = [
    "__version__",
    # Errors
    "MediaFlattenerError",
    "ResizeError",
    "StatError",
    "TransferError",
    "TraversalError",
    # Models
    "FileFormat",
    "FileRecord",
    "FileStatus",
    "TransferAction",
    "TransferResult",
    # Pipeline
    "FlattenResult",
    "TransferEngine",
    "deduplicate",
    "flatten_directory",
    "format_group_name",
    "format_timestamp",
    "normalize_extension",
    "resolve",
    "walk",
]
