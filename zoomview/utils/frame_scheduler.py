from abc import ABC, abstractmethod
from typing import Callable, List

from PyQt6.QtCore import QTimer


class FrameScheduler(ABC):
    """Runs a callback once on a future frame."""

    @abstractmethod
    def schedule(self, callback: Callable[[], None]) -> None:
        pass


class QtFrameScheduler(FrameScheduler):
    """Schedules on the Qt event loop, roughly one display frame later."""
    FRAME_INTERVAL_MS = 16

    def __init__(self, interval_ms: int | None = None):
        self._interval_ms = (
            self.FRAME_INTERVAL_MS if interval_ms is None else interval_ms
        )

    def schedule(self, callback: Callable[[], None]) -> None:
        QTimer.singleShot(self._interval_ms, callback)


class ManualFrameScheduler(FrameScheduler):
    """
    Queues callbacks until run_frame() is called.
    Used by tests and by hosts that drive frames themselves.
    """

    def __init__(self):
        self._pending: List[Callable[[], None]] = []
        self.frames_run = 0

    def schedule(self, callback: Callable[[], None]) -> None:
        self._pending.append(callback)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_frame(self) -> int:
        """Runs callbacks queued before this call. Returns how many ran."""
        due, self._pending = self._pending, []
        for callback in due:
            callback()
        if due:
            self.frames_run += 1
        return len(due)

    def run_until_idle(self, max_frames: int = 1000) -> int:
        frames = 0
        while self._pending and frames < max_frames:
            self.run_frame()
            frames += 1
        return frames
