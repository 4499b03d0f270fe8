"""Tests for the Flask responder and the debug drain."""

import logging

import pytest

from drift_monitor.drain import create_drain_app, format_request_dump
from drift_monitor.responder import create_responder_app


@pytest.fixture
def client():
    app = create_responder_app()
    app.config["TESTING"] = True
    return app.test_client()


class TestResponder:
    @pytest.mark.parametrize("path", ["/", "/samples/12345", "/anything/else?x=1"])
    def test_get_returns_empty_200(self, client, path):
        resp = client.get(path)
        assert resp.status_code == 200
        assert resp.data == b""
        assert resp.headers["Content-Type"].startswith("text/plain")

    @pytest.mark.parametrize("method", ["post", "put", "delete", "patch"])
    def test_other_methods(self, client, method):
        resp = getattr(client, method)("/samples/1", data="payload")
        assert resp.status_code == 200
        assert resp.data == b""

    def test_logs_path_when_enabled(self, caplog):
        app = create_responder_app(log_requests=True)
        app.config["TESTING"] = True
        with caplog.at_level(logging.INFO, logger="drift_monitor.responder"):
            app.test_client().get("/samples/987")
        assert "<- /samples/987" in caplog.text

    def test_quiet_by_default(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="drift_monitor.responder"):
            client.get("/samples/987")
        assert "/samples/987" not in caplog.text


class TestDrain:
    def test_format_request_dump(self):
        dump = format_request_dump(
            "POST", "/logs", [("Host", "drain"), ("Content-Type", "text/plain")], b"hello"
        )
        assert dump == "POST /logs\n  Host:drain\n  Content-Type:text/plain\nhello"

    def test_logs_full_request(self, caplog):
        app = create_drain_app()
        app.config["TESTING"] = True
        with caplog.at_level(logging.INFO, logger="drift_monitor.drain"):
            resp = app.test_client().post(
                "/drain?token=abc", data=b"<13>1 line one", headers={"X-Trace": "t-1"}
            )

        assert resp.status_code == 200
        assert resp.data == b""
        assert resp.headers["Content-Type"].startswith("text/plain")
        assert "POST /drain?token=abc" in caplog.text
        assert "  X-Trace:t-1" in caplog.text
        assert "<13>1 line one" in caplog.text
