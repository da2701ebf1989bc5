#!/usr/bin/env python3
"""
Script to flatten a photo tree into one folder with date-based names.

Usage:
    python flatten_media.py /path/to/source [-o ./output] [--resize] [--config /path/to/config.yaml]
"""

import sys
from pathlib import Path

# Ensure we can import the package if running from source
src_path = Path(__file__).resolve().parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from media_flattener.cli import main

if __name__ == "__main__":
    sys.exit(main())
