"""Unit tests for the request logging middleware."""

from unittest.mock import MagicMock

import pytest
import structlog
from fastapi import FastAPI
from fastapi.testclient import TestClient

from infrastructure.observability import REQUEST_ID_HEADER, RequestLoggingMiddleware


@pytest.fixture
def mock_logger():
    """Mock structlog logger."""
    return MagicMock(spec=structlog.stdlib.BoundLogger)


@pytest.fixture
def client(mock_logger):
    """Client for an app reporting the request id it sees."""
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware, logger=mock_logger)

    @app.get("/echo")
    async def echo():
        return {"request_id": structlog.contextvars.get_contextvars().get("request_id")}

    @app.get("/fail")
    async def fail():
        raise RuntimeError("boom")

    return TestClient(app, raise_server_exceptions=False)


class TestRequestLoggingMiddleware:
    """Tests for RequestLoggingMiddleware."""

    def test_generates_request_id(self, client):
        """A request id is generated, bound and echoed back."""
        response = client.get("/echo")

        request_id = response.headers[REQUEST_ID_HEADER]
        assert request_id
        assert response.json() == {"request_id": request_id}

    def test_reuses_incoming_request_id(self, client):
        """An incoming request id is kept."""
        response = client.get("/echo", headers={REQUEST_ID_HEADER: "req-123"})

        assert response.headers[REQUEST_ID_HEADER] == "req-123"
        assert response.json() == {"request_id": "req-123"}

    def test_logs_completed_request(self, client, mock_logger):
        """Each request is logged once with its outcome."""
        client.get("/echo")

        mock_logger.info.assert_called_once()
        args, kwargs = mock_logger.info.call_args
        assert args == ("http_request_completed",)
        assert kwargs["method"] == "GET"
        assert kwargs["path"] == "/echo"
        assert kwargs["status_code"] == 200
        assert kwargs["duration_ms"] >= 0

    def test_logs_failed_request(self, client, mock_logger):
        """Requests failing downstream are logged with status 500."""
        response = client.get("/fail")

        assert response.status_code == 500
        assert mock_logger.info.call_args.kwargs["status_code"] == 500
