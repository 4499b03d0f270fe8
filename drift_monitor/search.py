"""Client for the centralized log-search API (Papertrail events/search.json)."""

import json
import logging

import httpx

from drift_monitor.markers import LogEvent

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-Papertrail-Token"


class LogSearchClient:
    """Fetches recent events for a system from the log-search API."""

    def __init__(self, client: httpx.AsyncClient, search_url: str, token: str) -> None:
        self._client = client
        self._search_url = search_url
        self._token = token

    async def search(self, system_id: str):
        """Return the decoded JSON body, or the raw text if it is not JSON.

        Transport errors propagate to the caller.
        """
        response = await self._client.get(
            self._search_url,
            params={"system_id": system_id},
            headers={TOKEN_HEADER: self._token},
        )
        try:
            return json.loads(response.text)
        except json.JSONDecodeError:
            return response.text


def parse_events(body) -> list[LogEvent] | None:
    """Extract LogEvents from a search response.

    Returns None if the body is malformed (not an object with an events list).
    Individual events that cannot be parsed are skipped.
    """
    if not isinstance(body, dict) or not isinstance(body.get("events"), list):
        return None

    events = []
    for raw in body["events"]:
        if not isinstance(raw, dict):
            logger.warning("Skipping non-object event: %r", raw)
            continue
        try:
            events.append(LogEvent.from_dict(raw))
        except ValueError as e:
            logger.warning("Skipping unparseable event %s: %s", raw.get("id"), e)
    return events
