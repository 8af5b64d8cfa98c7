"""Tests for app wiring: health check and the access-log middleware."""

import logging
from unittest.mock import AsyncMock, patch

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from config.settings import Settings

ACCESS_LOGGER = "api.middleware"


def _access_lines(caplog):
    return [r for r in caplog.records if r.name == ACCESS_LOGGER]


class TestAccessLog:
    def test_health_is_timed_but_not_logged(self, client, caplog):
        caplog.set_level(logging.DEBUG, logger=ACCESS_LOGGER)
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        assert float(response.headers["X-Process-Time"]) >= 0
        assert _access_lines(caplog) == []

    def test_authenticated_request_names_the_user(self, client, sign_up_body, caplog):
        client.post("/sign-up", json=sign_up_body)
        token = client.post("/sign-in", json={"email": "a@x.com", "password": "p1"}).json()["token"]
        user_id = client.get("/me", headers={"authorization": token}).json()["id"]

        caplog.set_level(logging.DEBUG, logger=ACCESS_LOGGER)
        client.get("/transactions", headers={"authorization": token})

        (record,) = _access_lines(caplog)
        assert record.levelno == logging.DEBUG
        assert "GET /transactions 2xx" in record.getMessage()
        assert f"user={user_id}" in record.getMessage()
        assert token not in record.getMessage()

    def test_anonymous_request_is_logged_as_dash(self, client, caplog):
        caplog.set_level(logging.DEBUG, logger=ACCESS_LOGGER)
        client.get("/transactions")

        (record,) = _access_lines(caplog)
        assert "GET /transactions 4xx user=-" in record.getMessage()

    def test_server_errors_log_at_warning(self, client, caplog):
        boom = OperationalError("SELECT token", {}, Exception("db down"))
        caplog.set_level(logging.DEBUG, logger=ACCESS_LOGGER)
        with patch.object(client.app.state.session_store, "resolve", new=AsyncMock(side_effect=boom)):
            client.get("/transactions", headers={"authorization": "whatever"})

        (record,) = _access_lines(caplog)
        assert record.levelno == logging.WARNING
        assert "5xx" in record.getMessage()


class TestSettings:
    @pytest.mark.parametrize("token_bytes", [8, 97])
    def test_session_token_bytes_bounded(self, token_bytes):
        with pytest.raises(ValidationError):
            Settings(session_token_bytes=token_bytes)

    def test_cors_origins_are_strings(self):
        assert Settings(cors_origins=["http://localhost:3000"]).cors_origins == ["http://localhost:3000"]
