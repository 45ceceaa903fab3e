"""Shared helpers for progress-list tests."""

import pytest


class FakeStep:
    """Step with a fixed reported duration that records when it runs."""

    def __init__(self, code, duration=0, error=None, events=None, name=None):
        self.code = code
        self.name = name or code
        self.duration = duration
        self.error = error
        self.events = events
        self.runs = 0

    def start(self):
        self.runs += 1
        if self.events is not None:
            self.events.append(("execute", self.code))
        if self.error is not None:
            raise self.error

    def get_time(self):
        return self.duration

    def __repr__(self):
        return f"FakeStep({self.code!r})"


class RecordingListener:
    """Listener that appends every notification to a shared event list."""

    def __init__(self, events, label="listener"):
        self.events = events
        self.label = label

    def progress_step_started(self, step):
        self.events.append((self.label, "started", step.code))

    def progress_changed(self, step, step_progress, max_progress):
        self.events.append((self.label, "changed", step.code, step_progress, max_progress))

    def failed(self, step):
        self.events.append((self.label, "failed", step.code))


@pytest.fixture
def events():
    return []
