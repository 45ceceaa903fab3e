"""
Progress tracking state for ProgressList runs.

ProgressTracker is a listener that keeps an observable pydantic model of
the run, so a UI or dashboard can render it without knowing anything
about the steps.
"""

import logging
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class StepStage(str, Enum):
    """Lifecycle of a single step within a run."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETE = "complete"
    FAILED = "failed"


class StepStatus(BaseModel):
    """Status of one step."""
    code: str
    name: Optional[str] = None
    stage: StepStage = StepStage.PENDING
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    elapsed_ms: int = 0


class ProgressState(BaseModel):
    """Complete progress state for a run."""
    run_id: str
    started_at: datetime
    max_progress: int = 100

    progress: float = 0.0
    percent: float = 0.0

    current_step: Optional[StepStatus] = None
    steps: list[StepStatus] = Field(default_factory=list)
    failed_step: Optional[str] = None

    is_complete: bool = False
    is_failed: bool = False
    final_message: Optional[str] = None


class ProgressTracker:
    """
    Listener that mirrors a run into a ProgressState.

    Usage:
        tracker = ProgressTracker(max_progress=100)
        tracker.on_update(render)   # called with the state after every change

        steps.add_progress_listener(tracker)
        steps.start()
        tracker.finish("Done")
    """

    def __init__(self, max_progress: int = 100, run_id: Optional[str] = None):
        self.state = ProgressState(
            run_id=run_id or str(uuid.uuid4()),
            started_at=datetime.now(),
            max_progress=max_progress,
        )
        self._callbacks: list[Callable[[ProgressState], Any]] = []

    def on_update(self, callback: Callable[[ProgressState], Any]):
        """Register a callback for state updates."""
        self._callbacks.append(callback)

    def _notify(self):
        """Notify all registered callbacks of state change."""
        for callback in self._callbacks:
            try:
                callback(self.state)
            except Exception as e:
                # A broken renderer must not abort the run
                logger.warning(f"Progress callback {callback!r} failed: {e}")

    def _running_status(self, step: Any) -> Optional[StepStatus]:
        """Latest status entry for step, if it is still running."""
        if self.state.steps:
            status = self.state.steps[-1]
            if status.code == str(step.code) and status.stage == StepStage.RUNNING:
                return status
        return None

    def progress_step_started(self, step: Any) -> None:
        status = StepStatus(
            code=str(step.code),
            name=getattr(step, "name", None),
            stage=StepStage.RUNNING,
            started_at=datetime.now(),
        )
        self.state.current_step = status
        self.state.steps.append(status)
        self._notify()

    def progress_changed(self, step: Any, step_progress: float, max_progress: int) -> None:
        status = self._running_status(step)
        if status is not None:
            status.stage = StepStage.COMPLETE
            status.completed_at = datetime.now()
            status.elapsed_ms = step.get_time()

        self.state.max_progress = max_progress
        self.state.progress = min(self.state.progress + step_progress, float(max_progress))
        self.state.percent = 100.0 * self.state.progress / max_progress if max_progress else 100.0
        self.state.current_step = None
        self._notify()

    def failed(self, step: Any) -> None:
        status = self._running_status(step)
        if status is not None:
            status.stage = StepStage.FAILED
            status.completed_at = datetime.now()

        self.state.failed_step = str(step.code)
        self.state.is_failed = True
        self.state.current_step = None
        self._notify()

    def finish(self, message: Optional[str] = None):
        """Mark the run as complete."""
        self.state.is_complete = True
        self.state.final_message = message
        self._notify()
