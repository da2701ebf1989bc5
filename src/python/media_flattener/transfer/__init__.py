"""Copy, conversion and resize of resolved files."""

from media_flattener.transfer.engine import TransferEngine, finalize
from media_flattener.transfer.images import convert_to_jpeg, resize_to_width, scaled_size

__all__ = [
    "TransferEngine",
    "convert_to_jpeg",
    "finalize",
    "resize_to_width",
    "scaled_size",
]
