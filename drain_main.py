"""Standalone debug drain: dumps every request it receives to the log."""

import logging
import os
import sys

from drift_monitor.drain import create_drain_app


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        stream=sys.stdout,
    )
    port = int(os.environ.get("DRAIN_PORT", 8080))
    logging.getLogger(__name__).info("Drain listening on port %d", port)
    create_drain_app().run(host="0.0.0.0", port=port, use_reloader=False)


if __name__ == "__main__":
    main()
