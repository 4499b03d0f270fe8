"""Minimal Flask responder: target of the HTTP-log emitter."""

import logging

from flask import Flask, request

logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_responder_app(log_requests: bool = False) -> Flask:
    """Every method and path answers 200 with an empty text/plain body."""
    app = Flask(__name__)

    @app.route("/", defaults={"path": ""}, methods=ALL_METHODS)
    @app.route("/<path:path>", methods=ALL_METHODS)
    def sink(path):
        if log_requests:
            logger.info("<- %s", request.full_path.rstrip("?"))
        return "", 200, {"Content-Type": "text/plain"}

    return app


def run_responder(app: Flask, port: int, host: str = "0.0.0.0"):
    """Run the Flask app (intended for use in a daemon thread)."""
    app.run(host=host, port=port, use_reloader=False)
