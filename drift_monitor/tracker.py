"""Pending-marker tracker: matches emitted markers against fetched log events."""

import asyncio
import logging
import time

import httpx

from drift_monitor.markers import CHANNELS, LogEvent, PendingMarker, format_timestamp
from drift_monitor.recorder import MetricRecorder

logger = logging.getLogger(__name__)


class PendingMarkerTracker:
    """Sole owner of the pending marker lists, one per channel.

    Emitters never touch the lists directly. They hand markers over with
    register(), which puts them on a per-channel queue; the queues are drained
    into the lists at the start of each reconciliation pass.
    """

    def __init__(
        self,
        recorder: MetricRecorder,
        system_name: str,
        timeout_on_search: float,
        time_to_failure: float,
        time_func=None,
    ) -> None:
        self._recorder = recorder
        self._system_name = system_name
        self._timeout_on_search = timeout_on_search
        self._time_to_failure = time_to_failure
        self._time_func = time_func or time.time
        self._queues: dict[str, asyncio.Queue] = {c: asyncio.Queue() for c in CHANNELS}
        self._pending: dict[str, list[PendingMarker]] = {c: [] for c in CHANNELS}

    def register(self, channel: str, marker: PendingMarker) -> None:
        """Hand a freshly emitted marker over to the tracker."""
        self._queues[channel].put_nowait(marker)

    def pending(self, channel: str) -> list[PendingMarker]:
        """Copy of the markers currently awaiting confirmation on a channel."""
        return list(self._pending[channel])

    def queued(self, channel: str) -> int:
        """Number of registered markers not yet absorbed into the pending list."""
        return self._queues[channel].qsize()

    def _absorb(self, channel: str) -> None:
        queue = self._queues[channel]
        while True:
            try:
                self._pending[channel].append(queue.get_nowait())
            except asyncio.QueueEmpty:
                break

    async def reconcile_all(self, events: list[LogEvent]) -> None:
        """Absorb handed-over markers and reconcile every channel, in order."""
        for channel in CHANNELS:
            self._absorb(channel)
            self._pending[channel] = await self.reconcile(
                self._pending[channel], events, channel
            )

    async def reconcile(
        self, pending: list[PendingMarker], events: list[LogEvent], label: str
    ) -> list[PendingMarker]:
        """Resolve each marker to success, failure, or still pending.

        Returns the markers that are still pending. Each resolved marker
        produces exactly one metric.
        """
        keep = []
        for marker in pending:
            drift = self._time_func() - marker.emitted_at

            if drift > self._timeout_on_search:
                await self._record(label, False, drift)
                logger.info("Failed to receive: %s %s",
                            marker.id, format_timestamp(marker.emitted_at))
                continue

            event = _first_match(marker, events)
            if event is None:
                keep.append(marker)
                continue

            recorded_drift = event.received_at - marker.emitted_at
            if recorded_drift > self._time_to_failure:
                await self._record(label, False, drift)
                logger.info("Slow to receive (failure): %s %s",
                            marker.id, format_timestamp(marker.emitted_at))
            else:
                await self._record(label, True, recorded_drift)
        return keep

    async def _record(self, label: str, successful: bool, drift: float) -> None:
        """Record one result. A failed write is logged and the marker stays resolved."""
        try:
            await self._recorder.record(self._system_name, label, successful, drift)
        except httpx.HTTPError as e:
            logger.error("Failed to record %s metric (successful=%s): %s",
                         label, successful, e)


def _first_match(marker: PendingMarker, events: list[LogEvent]) -> LogEvent | None:
    for event in events:
        if marker.id in event.message:
            return event
    return None
