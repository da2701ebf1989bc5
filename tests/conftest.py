"""Pytest configuration and shared fixtures."""

from datetime import datetime
from pathlib import Path
from typing import Callable, Dict

import pytest

from media_flattener.naming import resolver

FIXED_TIME = datetime(2024, 5, 1, 10, 0, 0)


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: tests that encode/decode real images with Pillow")


@pytest.fixture
def input_root(tmp_path: Path) -> Path:
    """Empty input tree."""
    root = tmp_path / "input"
    root.mkdir()
    return root


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Output folder path (not created)."""
    return tmp_path / "output"


@pytest.fixture
def make_file() -> Callable[..., Path]:
    """Create a file, and its parent folders, below a directory."""
    def _make(root: Path, relative: str, content: bytes = b"data") -> Path:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path
    return _make


@pytest.fixture
def fixed_birthtime(monkeypatch) -> Dict[str, datetime]:
    """
    Make every file report FIXED_TIME as its creation time.

    Returns a dict of file name -> datetime; entries added to it override
    the fixed time for that file.
    """
    overrides: Dict[str, datetime] = {}

    def _birthtime(path: Path) -> datetime:
        if not path.exists():
            raise resolver.StatError(path, "No such file or directory")
        return overrides.get(path.name, FIXED_TIME)

    monkeypatch.setattr(resolver, "file_birthtime", _birthtime)
    return overrides


class RecordingProgress:
    """Progress reporter that remembers every call."""

    def __init__(self):
        self.calls = []
        self.total = None
        self.count = 0

    def start(self, total):
        self.calls.append("start")
        self.total = total

    def increment(self):
        self.calls.append("increment")
        self.count += 1

    def stop(self):
        self.calls.append("stop")


@pytest.fixture
def progress() -> RecordingProgress:
    return RecordingProgress()
