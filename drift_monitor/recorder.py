"""Metric recorder: writes drift measurements to InfluxDB or logs them in dry-run."""

import asyncio
import logging

import httpx

logger = logging.getLogger(__name__)

DATABASE = "logmonitor"
MEASUREMENT = "logs"


def format_line(name: str, metric_label: str, successful: bool, drift: float) -> str:
    """Encode one measurement in InfluxDB line protocol."""
    flag = "true" if successful else "false"
    return f"{MEASUREMENT},type={metric_label},successful={flag},host={name} drift={drift}"


class MetricRecorder:
    """Records success/failure plus drift for each resolved marker.

    Keeps per-label counters so the monitor can log summaries.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None,
        influxdb_url: str,
        dry_run: bool = False,
        delay: float = 0.1,
    ) -> None:
        self._client = client
        self._influxdb_url = influxdb_url.rstrip("/")
        self._dry_run = dry_run
        self._delay = delay
        self._counts: dict[str, dict[str, int]] = {}

    async def record(
        self, name: str, metric_label: str, successful: bool, drift: float
    ) -> None:
        if drift < 0:
            drift = 0

        if self._dry_run:
            logger.info(
                "=> write %s successful=%s host=%s drift=%s",
                metric_label, "true" if successful else "false", name, drift,
            )
            self._count(metric_label, successful)
            return

        response = await self._client.post(
            f"{self._influxdb_url}/write",
            params={"db": DATABASE, "_http_tag": name},
            content=format_line(name, metric_label, successful, drift),
        )
        response.raise_for_status()
        self._count(metric_label, successful)
        await asyncio.sleep(self._delay)

    def _count(self, metric_label: str, successful: bool) -> None:
        counts = self._counts.setdefault(metric_label, {"success": 0, "failure": 0})
        counts["success" if successful else "failure"] += 1

    def snapshot(self) -> dict[str, dict[str, int]]:
        """Copy of the success/failure counters, keyed by metric label."""
        return {label: dict(c) for label, c in self._counts.items()}
