"""Output name derivation and collision handling."""

from media_flattener.naming.resolver import (
    assign_target_paths,
    deduplicate,
    disambiguate,
    file_birthtime,
    resolve,
)
from media_flattener.naming.translator import (
    build_target_name,
    format_group_name,
    format_timestamp,
    normalize_extension,
)

__all__ = [
    "assign_target_paths",
    "build_target_name",
    "deduplicate",
    "disambiguate",
    "file_birthtime",
    "format_group_name",
    "format_timestamp",
    "normalize_extension",
    "resolve",
]
