"""Shared progress state reported by long-running work."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX = 60


@dataclass
class ProgressEvent:
    """Step count, transfer figures, status code and cancellation flag of a task."""

    current: int = 0
    max: int = DEFAULT_MAX
    now: float = 0.0
    total: float = 0.0
    speed: float = 0.0
    status_code: int = 0
    interrupt: bool = False

    def reset(self) -> None:
        """Return every field to its initial value."""
        self.current = 0
        self.max = DEFAULT_MAX
        self.now = 0.0
        self.total = 0.0
        self.speed = 0.0
        self.status_code = 0
        self.interrupt = False

    def increment_step(self, increment: int) -> None:
        self.current += increment

    def finish(self) -> None:
        """Move the step count to its maximum."""
        self.current = self.max

    def finished(self) -> bool:
        return self.current == self.max


_INSTANCE = ProgressEvent()


def get_progress() -> ProgressEvent:
    """Return the process-wide progress state."""
    return _INSTANCE