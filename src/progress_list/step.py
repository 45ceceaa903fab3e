"""
Progress steps: named units of work executed by a ProgressList.

A step carries an identifying code, does its work in execute(), and
remembers how long its last start() took.
"""

import time
from typing import Any, Callable, Optional


class ProgressStep:
    """
    Base class for a single unit of work.

    Subclasses override execute(). Callers (usually ProgressList) invoke
    start(), which runs execute() and records the elapsed wall-clock time.

    Usage:
        class DownloadStep(ProgressStep):
            def execute(self):
                fetch_everything()

        step = DownloadStep("download", name="Download data")
        step.start()
        step.get_time()  # milliseconds
    """

    def __init__(self, code: str, name: Optional[str] = None):
        self.code = code
        self.name = name or code
        self._time = 0

    def execute(self) -> None:
        """Do the work of this step. May raise."""
        raise NotImplementedError(f"{type(self).__name__} must implement execute()")

    def start(self) -> None:
        """Run execute() and measure how long it took."""
        started = time.time()
        try:
            self.execute()
        finally:
            self._time = int((time.time() - started) * 1000)

    def get_time(self) -> int:
        """Duration of the last start() in milliseconds."""
        return self._time

    @property
    def time(self) -> int:
        return self._time

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, name={self.name!r})"


class FunctionStep(ProgressStep):
    """Step backed by a plain callable."""

    def __init__(
        self,
        code: str,
        func: Callable[..., Any],
        *args: Any,
        name: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(code, name=name)
        self.func = func
        self.args = args
        self.kwargs = kwargs
        self.result: Any = None

    def execute(self) -> None:
        self.result = self.func(*self.args, **self.kwargs)
