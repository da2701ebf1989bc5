"""
Configuration management for media-flattener.

Settings come from an optional YAML file and are overridden by command-line
arguments. Example config.yaml:

    input_root: /Users/me/Dropbox/Pictures/Wedding
    output_dir: ./output
    resize: true
    resize_width: 1920
    jpeg_quality: 90
"""

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from media_flattener.transfer.images import DEFAULT_JPEG_QUALITY, DEFAULT_RESIZE_WIDTH

logger = logging.getLogger(__name__)

# Default locations to search for config.yaml
CONFIG_SEARCH_PATHS = [
    Path("config.yaml"),
    Path("src/python/config.yaml"),
    Path.home() / ".media_flattener" / "config.yaml",
]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class FlattenConfig:
    """
    Settings for one flatten run.

    Attributes:
        input_root: Directory tree to read from
        output_dir: Flat folder to write to (created if missing)
        resize: Whether to run the resize pass on JPEG output
        resize_width: Target width in pixels for the resize pass
        jpeg_quality: JPEG quality for converted and resized files (1-100)
        progress_bar: Whether to show a terminal progress bar
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        manifest: Optional CSV path listing every record after the run
    """
    input_root: Optional[str] = None
    output_dir: str = "./output"
    resize: bool = False
    resize_width: int = DEFAULT_RESIZE_WIDTH
    jpeg_quality: int = DEFAULT_JPEG_QUALITY
    progress_bar: bool = True
    log_level: str = "INFO"
    manifest: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FlattenConfig":
        """Create a config from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))
        config = cls(**{k: v for k, v in data.items() if k in known})
        config.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def validate(self) -> None:
        """
        Check value ranges.

        Raises:
            ValueError: If a setting is out of range
        """
        if not isinstance(self.resize_width, int) or self.resize_width <= 0:
            raise ValueError(f"resize_width must be a positive integer, got {self.resize_width!r}")
        if not isinstance(self.jpeg_quality, int) or not 1 <= self.jpeg_quality <= 100:
            raise ValueError(f"jpeg_quality must be between 1 and 100, got {self.jpeg_quality!r}")
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Specific path to config file. If None, searches default locations.

    Returns:
        Dictionary containing configuration. Empty when no file was found
        in the default locations.

    Raises:
        FileNotFoundError: If config_path is given and does not exist.
    """
    path_to_load = None

    if config_path:
        if config_path.exists():
            path_to_load = config_path
        else:
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        for path in CONFIG_SEARCH_PATHS:
            if path.exists():
                path_to_load = path
                break

    if not path_to_load:
        logger.debug("No config file found, using defaults")
        return {}

    logger.info("Loading config from %s", path_to_load)

    with open(path_to_load, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    return config or {}


def load_settings(config_path: Optional[Path] = None) -> FlattenConfig:
    """Load a FlattenConfig from YAML, falling back to defaults."""
    return FlattenConfig.from_dict(load_config(config_path))
