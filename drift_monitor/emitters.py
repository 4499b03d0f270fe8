"""Marker emitters for the app-log and HTTP-access-log channels."""

import logging
import random
import sys
import time

import httpx

from drift_monitor.markers import (
    APP_LOGS,
    HTTP_LOGS,
    PendingMarker,
    format_timestamp,
    generate_marker_id,
)
from drift_monitor.tracker import PendingMarkerTracker

logger = logging.getLogger(__name__)

SAMPLES_PATH = "/samples/"


class AppLogEmitter:
    """Writes a marker line to stdout so it shows up in the application logs."""

    def __init__(self, tracker: PendingMarkerTracker, stream=None,
                 time_func=None, rng: random.Random | None = None):
        self._tracker = tracker
        self._stream = stream or sys.stdout
        self._time_func = time_func or time.time
        self._rng = rng

    async def emit(self) -> PendingMarker:
        marker_id = generate_marker_id(self._rng)
        emitted_at = self._time_func()
        print(f"id {marker_id} time: {format_timestamp(emitted_at)}",
              file=self._stream, flush=True)

        marker = PendingMarker(id=marker_id, emitted_at=emitted_at)
        self._tracker.register(APP_LOGS, marker)
        return marker


class HttpLogEmitter:
    """Requests /samples/<id> on the monitored app so it logs an access line.

    The marker is registered only once the request completed; a failed
    request raises and registers nothing.
    """

    def __init__(self, tracker: PendingMarkerTracker, client: httpx.AsyncClient,
                 system_url: str, time_func=None, rng: random.Random | None = None):
        self._tracker = tracker
        self._client = client
        self._system_url = system_url.rstrip("/")
        self._time_func = time_func or time.time
        self._rng = rng

    async def emit(self) -> PendingMarker:
        marker_id = generate_marker_id(self._rng)
        emitted_at = self._time_func()
        path = SAMPLES_PATH + marker_id

        response = await self._client.get(self._system_url + path)
        logger.debug("GET %s -> %d", path, response.status_code)

        marker = PendingMarker(id=path, emitted_at=emitted_at)
        self._tracker.register(HTTP_LOGS, marker)
        return marker
