"""
Progress reporting for the transfer passes.

The driver talks to a ProgressReporter through three calls:
start(total), increment() once per unit of work, and stop().
One unit is one file in one pass, so the total is
number_of_files x number_of_passes.
"""

from typing import Callable, Optional

from tqdm import tqdm


class ProgressReporter:
    """Reporter that ignores every call. Base class for the others."""

    def start(self, total: int) -> None:
        pass

    def increment(self) -> None:
        pass

    def stop(self) -> None:
        pass


class TqdmProgress(ProgressReporter):
    """Terminal progress bar."""

    def __init__(self, desc: str = "Flattening", unit: str = "files", disable: bool = False):
        self.desc = desc
        self.unit = unit
        self.disable = disable
        self._bar: Optional[tqdm] = None

    def start(self, total: int) -> None:
        self._bar = tqdm(total=total, desc=self.desc, unit=self.unit, disable=self.disable)

    def increment(self) -> None:
        if self._bar is not None:
            self._bar.update(1)

    def stop(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None


class CallbackProgress(ProgressReporter):
    """Adapts a progress(current, total) callable."""

    def __init__(self, callback: Callable[[int, int], None]):
        self.callback = callback
        self.current = 0
        self.total = 0

    def start(self, total: int) -> None:
        self.current = 0
        self.total = total
        self.callback(self.current, self.total)

    def increment(self) -> None:
        self.current += 1
        self.callback(self.current, self.total)
