"""Entry point for the log drift monitor."""

import asyncio
import logging
import signal
import sys
import threading

import httpx

from drift_monitor.config import ConfigError, load_config
from drift_monitor.monitor import LogDriftMonitor
from drift_monitor.responder import create_responder_app, run_responder

logger = logging.getLogger(__name__)

try:
    import uvloop
    asyncio.set_event_loop_policy(uvloop.EventLoopPolicy())
except ImportError:
    pass


async def run(config) -> None:
    async with httpx.AsyncClient(timeout=config.request_timeout) as client:
        monitor = LogDriftMonitor(config, client)

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, monitor.stop)

        await monitor.run()


def main():
    try:
        config = load_config()
        config.validate()
    except ConfigError as e:
        logging.basicConfig(level=logging.INFO, stream=sys.stderr)
        logger.error("Configuration error: %s", e)
        sys.exit(1)

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        stream=sys.stderr,
    )

    app = create_responder_app(log_requests=config.dry_run)
    responder_thread = threading.Thread(
        target=run_responder, args=(app, config.port), daemon=True
    )
    responder_thread.start()
    logger.info("Responder listening on port %d", config.port)

    asyncio.run(run(config))


if __name__ == "__main__":
    main()
