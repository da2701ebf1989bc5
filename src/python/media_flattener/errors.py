"""Exceptions raised by media-flattener."""

from pathlib import Path
from typing import Optional


class MediaFlattenerError(Exception):
    """Base error for the project."""


class TraversalError(MediaFlattenerError):
    """A directory in the input tree could not be listed. Aborts the run."""

    def __init__(self, directory: Path, reason: str):
        self.directory = directory
        super().__init__(f"Cannot read directory {directory}: {reason}")


class FileError(MediaFlattenerError):
    """Base for errors isolated to a single file."""

    def __init__(self, path: Path, reason: str, target: Optional[Path] = None):
        self.path = path
        self.target = target
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class StatError(FileError):
    pass


class TransferError(FileError):
    pass


class ResizeError(FileError):
    pass
