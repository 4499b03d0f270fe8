"""Watch loop tick: fetch recent events and reconcile both marker channels."""

import logging

from drift_monitor.markers import APP_LOGS, HTTP_LOGS
from drift_monitor.search import LogSearchClient, parse_events
from drift_monitor.tracker import PendingMarkerTracker

logger = logging.getLogger(__name__)


class LogWatcher:
    def __init__(self, search_client: LogSearchClient, tracker: PendingMarkerTracker,
                 system_name: str, verbose: bool = False):
        self._search_client = search_client
        self._tracker = tracker
        self._system_name = system_name
        self._verbose = verbose

    async def watch(self) -> bool:
        """Run one fetch + reconcile pass.

        Returns False if the search response was malformed and the pass was
        skipped; pending markers are left untouched in that case.
        """
        if self._verbose:
            logger.info("-- Looking through logs, before %s", self._counts())

        logger.info("Searching logs for %s...", self._system_name)
        body = await self._search_client.search(self._system_name)
        events = parse_events(body)
        if events is None:
            logger.error("Malformed response from log search: %.500r", body)
            return False

        await self._tracker.reconcile_all(events)

        if self._verbose:
            logger.info("-- Looked through logs, after %s", self._counts())
        return True

    def _counts(self) -> str:
        return " ".join(
            f"{channel}={len(self._tracker.pending(channel)) + self._tracker.queued(channel)}"
            for channel in (APP_LOGS, HTTP_LOGS)
        )
