"""
Classification of directory entries during the walk.

Entries are classified by name alone, without a stat call:
1. Names in SKIP_NAMES (OS metadata artifacts) are dropped.
2. Names without an extension are directories to descend into.
3. Names with a RAW or sidecar extension are dropped.
4. Everything else is a file to process.
"""

from pathlib import Path

from media_flattener.models.enums import EntryKind, FileFormat

SKIP_NAMES = frozenset({
    ".DS_Store",
    ".localized",
    "Icon",          # macOS custom folder icon, stored as "Icon\r"
    "Thumbs.db",
    "desktop.ini",
})


def get_extension(name: str) -> str:
    """
    Get the final extension of a name, as written on disk.

    Dotfiles such as ".DS_Store" have no extension.
    """
    return Path(name).suffix


def is_skip_name(name: str) -> bool:
    return name.strip() in SKIP_NAMES


def is_skip_extension(name: str) -> bool:
    return FileFormat.from_filename(name.strip()).is_skipped


def classify_entry(name: str) -> EntryKind:
    """
    Decide how the walker treats a directory entry.

    Args:
        name: Entry name as returned by the directory listing

    Returns:
        EntryKind.SKIP, EntryKind.DIRECTORY or EntryKind.FILE

    Examples:
        >>> classify_entry(".DS_Store")
        EntryKind.SKIP
        >>> classify_entry("Ceremony")
        EntryKind.DIRECTORY
        >>> classify_entry("IMG_0001.CR2")
        EntryKind.SKIP
        >>> classify_entry("IMG_0001.JPG")
        EntryKind.FILE
    """
    stripped = name.strip()
    if is_skip_name(stripped):
        return EntryKind.SKIP
    if not get_extension(stripped):
        return EntryKind.DIRECTORY
    if is_skip_extension(stripped):
        return EntryKind.SKIP
    return EntryKind.FILE
