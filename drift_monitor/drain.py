"""Debug drain: logs every request it receives in full and answers 200."""

import logging

from flask import Flask, request

from drift_monitor.responder import ALL_METHODS

logger = logging.getLogger(__name__)


def format_request_dump(method: str, url: str, headers, body: bytes) -> str:
    """Render a request as method/url, indented header lines, then the body."""
    header_lines = "\n".join(f"  {name}:{value}" for name, value in headers)
    return "\n".join([
        f"{method} {url}",
        header_lines,
        body.decode("utf-8", errors="replace"),
    ])


def create_drain_app() -> Flask:
    app = Flask(__name__)

    @app.route("/", defaults={"path": ""}, methods=ALL_METHODS)
    @app.route("/<path:path>", methods=ALL_METHODS)
    def drain(path):
        body = request.get_data(cache=False)
        logger.info("%s\n", format_request_dump(
            request.method, request.full_path.rstrip("?"), request.headers.items(), body
        ))
        return "", 200, {"Content-Type": "text/plain"}

    return app
