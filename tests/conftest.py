"""Shared fixtures: a settable clock and a recorder that keeps what it was given."""

import pytest

from drift_monitor.tracker import PendingMarkerTracker

T0 = 1_700_000_000.0


class FakeClock:
    def __init__(self, now: float = T0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class RecordingRecorder:
    """Stands in for MetricRecorder; stores (name, label, successful, drift)."""

    def __init__(self):
        self.calls: list[tuple] = []

    async def record(self, name, metric_label, successful, drift):
        self.calls.append((name, metric_label, successful, drift))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def recorder():
    return RecordingRecorder()


@pytest.fixture
def tracker(recorder, clock):
    return PendingMarkerTracker(
        recorder,
        "probe-app",
        timeout_on_search=3600,
        time_to_failure=60,
        time_func=clock,
    )
