"""
Listener interface for observing a ProgressList run.

Listeners let a caller drive a progress bar, a log or a telemetry sink
without putting any presentation code inside the steps themselves.
"""

import logging
import math
from typing import Any, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class ProgressStepListener(Protocol):
    """Receives notifications from ProgressList.start()."""

    def progress_step_started(self, step: Any) -> None:
        """Called before a step runs.

        Raising here aborts the run and triggers failed(step).
        """
        ...

    def progress_changed(self, step: Any, step_progress: float, max_progress: int) -> None:
        """Called after a step completed successfully.

        Args:
            step: The step that just finished
            step_progress: Progress units this step is worth
            max_progress: Total progress scale of the list
        """
        ...

    def failed(self, step: Any) -> None:
        """Called once when a step (or a started notification) raised.

        The run stops after this call.
        """
        ...


class LoggingListener:
    """Listener that writes one log record per notification."""

    def __init__(self, log: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.log = log or logger
        self.level = level
        self.progress = 0.0
        self._finished = False

    def reset(self) -> None:
        """Forget the progress of the previous run."""
        self.progress = 0.0
        self._finished = False

    def progress_step_started(self, step: Any) -> None:
        # A run that reached max_progress or failed is over; this is a new one
        if self._finished:
            self.reset()
        self.log.log(self.level, f"Step started: {step.code}")

    def progress_changed(self, step: Any, step_progress: float, max_progress: int) -> None:
        self.progress = min(self.progress + step_progress, max_progress)
        percent = 100.0 * self.progress / max_progress if max_progress else 100.0
        self.log.log(
            self.level,
            f"Step finished: {step.code} in {step.get_time()} ms ({percent:.1f}%)",
        )
        if self.progress >= max_progress or math.isclose(self.progress, max_progress):
            self._finished = True

    def failed(self, step: Any) -> None:
        self.log.error(f"Step failed: {step.code}")
        self._finished = True
