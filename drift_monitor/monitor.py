"""Wires the probe together and runs its periodic tasks on one event loop."""

import asyncio
import logging

import httpx

from drift_monitor.config import Config
from drift_monitor.emitters import AppLogEmitter, HttpLogEmitter
from drift_monitor.recorder import MetricRecorder
from drift_monitor.scheduler import PeriodicTask
from drift_monitor.search import LogSearchClient
from drift_monitor.tracker import PendingMarkerTracker
from drift_monitor.watcher import LogWatcher

logger = logging.getLogger(__name__)


class LogDriftMonitor:
    """Emits markers on both channels and watches for them in the search API."""

    def __init__(self, config: Config, client: httpx.AsyncClient, time_func=None,
                 stream=None):
        self.config = config
        self.recorder = MetricRecorder(
            client, config.influxdb_url, dry_run=config.dry_run, delay=config.record_delay
        )
        self.tracker = PendingMarkerTracker(
            self.recorder,
            config.system_name,
            config.timeout_on_search,
            config.time_to_failure,
            time_func=time_func,
        )
        self.app_emitter = AppLogEmitter(self.tracker, stream=stream, time_func=time_func)
        self.http_emitter = HttpLogEmitter(
            self.tracker, client, config.system_url, time_func=time_func
        )
        self.watcher = LogWatcher(
            LogSearchClient(client, config.search_url, config.papertrail_token),
            self.tracker,
            config.system_name,
            verbose=config.dry_run,
        )
        self.tasks = [
            PeriodicTask("http-log emitter", self.http_emitter.emit,
                         config.http_log_interval),
            PeriodicTask("app-log emitter", self.app_emitter.emit,
                         config.app_log_interval),
            PeriodicTask("log watcher", self.watcher.watch,
                         config.watch_interval, delay_first=True),
        ]

    async def run(self) -> None:
        """Run every periodic task until stop() is called."""
        logger.info("System: %s", self.config.system_name)
        await asyncio.gather(*(task.run() for task in self.tasks))
        logger.info("Monitor stopped, results: %s", self.recorder.snapshot())

    def stop(self) -> None:
        for task in self.tasks:
            task.stop()
