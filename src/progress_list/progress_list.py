"""
Sequential execution of progress steps with listener notifications.

ProgressList plans the execution of several pieces of code, each one
held by a step. start() runs them in insertion order and notifies the
registered listeners when each step starts, when progress changes and
when a step fails. A caller can build a progress bar on top of the
listeners without touching the code doing the actual work.
"""

import logging
from typing import Any, Iterable, Iterator, Optional

from progress_list.config import ProgressListConfig
from progress_list.listener import ProgressStepListener


class _RunCursor:
    """Position of one start() call in the step sequence."""

    def __init__(self):
        self.index = 0


class ProgressList:
    """
    Ordered list of steps plus the engine that runs them.

    Usage:
        steps = ProgressList(max_progress=100)
        steps.append(FunctionStep("load", load_data))
        steps.append(FunctionStep("index", build_index))
        steps.add_progress_listener(LoggingListener())
        steps.start()
        steps.get_time()  # milliseconds spent in successful steps

    The step sequence may be changed while start() is running (for
    example by a listener). Steps inserted after the current position
    are executed; the progress increment is recomputed from the live
    length on every step unless fixed_step_weight is set.
    """

    def __init__(
        self,
        max_progress: int,
        logger: Optional[logging.Logger] = None,
        fixed_step_weight: bool = False,
    ):
        self.max_progress = max_progress
        self.fixed_step_weight = fixed_step_weight
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self._steps: list[Any] = []
        self._listeners: list[ProgressStepListener] = []
        self._time = 0
        # One cursor per start() call in progress, so runs may nest
        self._cursors: list[_RunCursor] = []

    @classmethod
    def from_config(
        cls,
        config: ProgressListConfig,
        logger: Optional[logging.Logger] = None,
    ) -> "ProgressList":
        """
        Create an empty list from configuration.

        log_level is applied to an injected logger only; the shared
        module logger keeps whatever level the application gave it.
        """
        progress_list = cls(
            config.max_progress,
            logger=logger,
            fixed_step_weight=config.fixed_step_weight,
        )
        if logger is not None:
            logger.setLevel(config.log_level)
        return progress_list

    # -- sequence operations --------------------------------------------

    def append(self, step: Any) -> None:
        self._steps.append(step)

    add = append

    def extend(self, steps: Iterable[Any]) -> None:
        for step in steps:
            self.append(step)

    def insert(self, index: int, step: Any) -> None:
        """Insert a step before index (same clamping rules as list.insert)."""
        size = len(self._steps)
        if index < 0:
            index = max(0, size + index)
        index = min(index, size)

        self._steps.insert(index, step)
        for cursor in self._cursors:
            if index <= cursor.index:
                cursor.index += 1

    def remove(self, step: Any) -> None:
        """Remove the first occurrence of step. Raises ValueError if absent."""
        index = self._steps.index(step)
        del self._steps[index]
        for cursor in self._cursors:
            if index <= cursor.index:
                cursor.index -= 1

    def get(self, code: str) -> Optional[Any]:
        """
        Get a step by its code.

        Returns the first step with a matching code, or None.
        """
        for step in self._steps:
            if step.code == code:
                return step
        return None

    @property
    def steps(self) -> tuple:
        return tuple(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._steps))

    def __getitem__(self, index: int) -> Any:
        return self._steps[index]

    def __contains__(self, step: Any) -> bool:
        return step in self._steps

    def __repr__(self) -> str:
        codes = [step.code for step in self._steps]
        return f"ProgressList(max_progress={self.max_progress}, steps={codes})"

    # -- listeners ------------------------------------------------------

    def add_progress_listener(self, listener: ProgressStepListener) -> None:
        """Register a listener. Listeners are notified in registration order."""
        self._listeners.append(listener)

    add_listener = add_progress_listener

    @property
    def listeners(self) -> tuple:
        return tuple(self._listeners)

    # -- execution ------------------------------------------------------

    def start(self) -> None:
        """
        Execute all the steps in the order they were inserted.

        A step that raises, or a listener that raises while being told a
        step started, stops the whole run: the error is logged and every
        listener gets failed(step). Errors raised by progress_changed()
        are not caught.
        """
        initial_size = len(self._steps)
        cursor = _RunCursor()
        self._cursors.append(cursor)

        try:
            while cursor.index < len(self._steps):
                step = self._steps[cursor.index]

                try:
                    for listener in list(self._listeners):
                        listener.progress_step_started(step)

                    step.start()
                except Exception as e:
                    self.logger.error(
                        f"Progress step {step.code!r} failed: {e}", exc_info=True
                    )
                    for listener in list(self._listeners):
                        listener.failed(step)
                    return

                self._time += step.get_time()

                step_count = initial_size if self.fixed_step_weight else len(self._steps)
                single_step_progress = self.max_progress / step_count if step_count else 0.0

                for listener in list(self._listeners):
                    listener.progress_changed(step, single_step_progress, self.max_progress)

                cursor.index += 1
        finally:
            self._cursors.remove(cursor)

    # -- time -----------------------------------------------------------

    def get_time(self) -> int:
        """
        How long the process took, in milliseconds.

        Only meaningful after start(); counts only the steps that
        completed successfully.
        """
        return self._time

    @property
    def time(self) -> int:
        return self._time
