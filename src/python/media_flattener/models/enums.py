"""Enumerations for media-flattener models."""

from enum import Enum, auto
from pathlib import Path


class FileStatus(Enum):
    """
    Lifecycle of a file through one batch.

    DISCOVERED -> RESOLVED -> TRANSFERRED -> (RESIZED) -> DONE, or FAILED
    at any per-file step. A FAILED file never blocks the files after it.
    """
    DISCOVERED = auto()
    RESOLVED = auto()
    TRANSFERRED = auto()
    RESIZED = auto()
    DONE = auto()
    FAILED = auto()


class TransferAction(Enum):
    """What the transfer pass does with a file."""
    COPY = auto()
    CONVERT = auto()


class EntryKind(Enum):
    """How the walker treats a directory entry."""
    DIRECTORY = auto()
    FILE = auto()
    SKIP = auto()


class FileFormat(Enum):
    """
    File formats the flattener knows about.

    Grouped by type:
    - RAW formats: never copied (skipped during the walk)
    - Standard formats: copied as-is, JPEGs can be resized
    - HEIC family: transcoded to JPEG
    - Sidecar/database formats: never copied
    - Video formats: copied as-is (listed so they are not UNKNOWN)
    """
    # RAW formats
    CR2 = "cr2"      # Canon RAW 2
    CR3 = "cr3"      # Canon RAW 3
    NEF = "nef"      # Nikon RAW
    ARW = "arw"      # Sony RAW
    DNG = "dng"      # Adobe Digital Negative
    RAF = "raf"      # Fujifilm RAW
    ORF = "orf"      # Olympus RAW
    RW2 = "rw2"      # Panasonic RAW

    # Standard image formats
    JPEG = "jpg"
    PNG = "png"
    GIF = "gif"
    TIFF = "tiff"
    WEBP = "webp"

    # Apple camera container
    HEIC = "heic"
    HEIF = "heif"

    # Sidecar / database formats
    XMP = "xmp"
    THM = "thm"      # Camera thumbnail
    AAE = "aae"      # Apple edit instructions
    DB = "db"

    # Video formats
    MP4 = "mp4"
    MOV = "mov"
    AVI = "avi"
    M4V = "m4v"

    UNKNOWN = "unknown"

    @classmethod
    def from_extension(cls, extension: str) -> "FileFormat":
        """
        Get FileFormat from a file extension.

        Args:
            extension: File extension (with or without leading dot)

        Returns:
            The matching FileFormat, or UNKNOWN if not recognized
        """
        ext = extension.lower().lstrip(".")

        if ext in {"jpg", "jpeg"}:
            return cls.JPEG
        if ext in {"tif", "tiff"}:
            return cls.TIFF

        for fmt in cls:
            if fmt.value == ext:
                return fmt

        return cls.UNKNOWN

    @classmethod
    def from_filename(cls, filename: str) -> "FileFormat":
        """
        Get FileFormat from a filename or file path.

        Examples:
            >>> FileFormat.from_filename("photo.jpeg")
            FileFormat.JPEG
            >>> FileFormat.from_filename("/photos/IMG_1234.HEIC")
            FileFormat.HEIC
        """
        return cls.from_extension(Path(filename).suffix)

    @property
    def is_raw(self) -> bool:
        """Check if this format is a camera RAW format."""
        return self in (
            FileFormat.CR2, FileFormat.CR3, FileFormat.NEF,
            FileFormat.ARW, FileFormat.DNG, FileFormat.RAF,
            FileFormat.ORF, FileFormat.RW2,
        )

    @property
    def is_sidecar(self) -> bool:
        """Check if this format is a sidecar or database file."""
        return self in (FileFormat.XMP, FileFormat.THM, FileFormat.AAE, FileFormat.DB)

    @property
    def is_skipped(self) -> bool:
        """Formats that are never copied to the output folder."""
        return self.is_raw or self.is_sidecar

    @property
    def is_heic_family(self) -> bool:
        """Formats that must be transcoded to JPEG."""
        return self in (FileFormat.HEIC, FileFormat.HEIF)
