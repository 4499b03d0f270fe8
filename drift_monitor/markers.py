"""Marker and log event models."""

import random
from dataclasses import dataclass
from datetime import datetime, timezone

APP_LOGS = "app_logs"
HTTP_LOGS = "http_logs"
CHANNELS = (APP_LOGS, HTTP_LOGS)

MARKER_ID_RANGE = 100_000_000


@dataclass(frozen=True)
class PendingMarker:
    """A marker emitted into a log channel and not yet seen in the search API."""

    id: str
    emitted_at: float  # epoch seconds


@dataclass(frozen=True)
class LogEvent:
    message: str
    received_at: float  # epoch seconds, assigned by the log pipeline

    @classmethod
    def from_dict(cls, data: dict) -> "LogEvent":
        """Build a LogEvent from a search API event. Raises ValueError if unusable."""
        message = data.get("message")
        if not isinstance(message, str):
            raise ValueError("event has no message")
        return cls(message=message, received_at=parse_timestamp(data.get("received_at")))


def generate_marker_id(rng: random.Random | None = None) -> str:
    """Random marker id. Collisions are possible; nothing checks for them."""
    value = (rng or random).random()
    return str(round(value * MARKER_ID_RANGE))


def parse_timestamp(value) -> float:
    """Convert an ISO-8601 timestamp (or epoch number) to epoch seconds.

    Naive timestamps are treated as UTC.
    """
    if isinstance(value, bool):
        raise ValueError(f"not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"not a timestamp: {value!r}")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


def format_timestamp(epoch: float) -> str:
    """Render epoch seconds as an ISO-8601 UTC string with milliseconds."""
    dt = datetime.fromtimestamp(epoch, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"
