"""
Pure functions that turn a file's timestamp and folder into an output name.

Output names look like:
    2024-05-01-10-00-00-000-ceremony-photos.jpg
    |----- timestamp -----| |-- group --| |ext|
"""

import os
import re
import unicodedata
from datetime import datetime
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]

# Fixed locale folding applied to each folder segment
_CHARACTER_MAP = str.maketrans({"å": "a", "ä": "a", "ö": "o"})

_EXTENSION_ALIASES = {".jpeg": ".jpg"}

_SEPARATORS = re.compile(r"[\\/]")


def format_timestamp(timestamp: datetime) -> str:
    """
    Render a timestamp as YYYY-MM-DD-HH-MM-SS-mmm.

    The timestamp is used as given; no timezone conversion happens. Because
    every field is fixed width, comparing two rendered strings gives the same
    order as comparing the timestamps.

    Example:
        >>> format_timestamp(datetime(2024, 5, 1, 10, 0, 0, 7000))
        '2024-05-01-10-00-00-007'
    """
    return (
        f"{timestamp.year:04d}-{timestamp.month:02d}-{timestamp.day:02d}-"
        f"{timestamp.hour:02d}-{timestamp.minute:02d}-{timestamp.second:02d}-"
        f"{timestamp.microsecond // 1000:03d}"
    )


def format_group_name(path: PathLike, input_root: PathLike) -> str:
    """
    Build the group name from the folders between the input root and a file.

    Args:
        path: Directory containing the file
        input_root: Configured input root

    Returns:
        Lowercase, hyphen-joined folder lineage. Empty when the file sits
        directly in the input root.

    Example:
        >>> format_group_name("/photos/Ceremony/Photos/", "/photos/")
        'ceremony-photos'
        >>> format_group_name("/photos/Bröllop Dag", "/photos")
        'brollop-dag'
    """
    path_str = os.fspath(path)
    root_str = os.fspath(input_root)

    if root_str and path_str.startswith(root_str):
        path_str = path_str[len(root_str):]

    segments = [s for s in _SEPARATORS.split(path_str) if s]
    return "-".join(_format_segment(s) for s in segments)


def _format_segment(segment: str) -> str:
    # macOS stores names decomposed; compose so "å" is one character
    segment = unicodedata.normalize("NFC", segment)
    return segment.lower().replace(" ", "-").translate(_CHARACTER_MAP)


def normalize_extension(extension: str) -> str:
    """
    Lowercase an extension and map aliases to their canonical form.

    HEIC extensions are kept; they become ".jpg" only when the file is
    converted.

    Example:
        >>> normalize_extension(".JPEG")
        '.jpg'
        >>> normalize_extension(".HEIC")
        '.heic'
    """
    ext = extension.lower()
    return _EXTENSION_ALIASES.get(ext, ext)


def build_target_name(timestamp: datetime, group_name: str, extension: str) -> str:
    """Join timestamp, optional group name and normalized extension."""
    group = f"-{group_name}" if group_name else ""
    return f"{format_timestamp(timestamp)}{group}{normalize_extension(extension)}"
