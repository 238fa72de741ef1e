"""Unit tests for logging setup"""

import logging

import pytest

from backend.app.api.deps import get_credential_service
from backend.app.core.config import Settings, settings
from backend.app.core.logging import ACCESS_LOGGER_NAME, configure_logging, get_access_logger
from backend.app.main import app


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    configure_logging(settings)


def test_access_log_is_appended_to_file(tmp_path):
    log_file = tmp_path / "access.log"
    configure_logging(Settings(_env_file=None, ACCESS_LOG_FILE=str(log_file)))

    get_access_logger().info('127.0.0.1 "GET /files" 200 1.0ms')
    for handler in logging.getLogger(ACCESS_LOGGER_NAME).handlers:
        handler.flush()

    assert '"GET /files" 200' in log_file.read_text()


def test_reconfiguring_does_not_duplicate_handlers(tmp_path):
    config = Settings(_env_file=None, ACCESS_LOG_FILE=str(tmp_path / "access.log"))

    configure_logging(config)
    configure_logging(config)

    assert len(logging.getLogger(ACCESS_LOGGER_NAME).handlers) == 2


def test_access_logger_does_not_propagate():
    configure_logging(Settings(_env_file=None))

    access_logger = get_access_logger()

    assert access_logger.propagate is False
    assert len(access_logger.handlers) == 1


@pytest.mark.asyncio
async def test_requests_are_logged(client, caplog):
    access_logger = get_access_logger()
    access_logger.addHandler(caplog.handler)
    try:
        await client.get("/")
    finally:
        access_logger.removeHandler(caplog.handler)

    assert any('"GET /"' in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_unhandled_errors_are_logged_as_500(client, caplog):
    def broken_service():
        raise RuntimeError("database exploded")

    app.dependency_overrides[get_credential_service] = broken_service
    access_logger = get_access_logger()
    access_logger.addHandler(caplog.handler)
    try:
        response = await client.post("/auth/login", json={"email": "ann@x.com", "password": "p"})
    finally:
        access_logger.removeHandler(caplog.handler)

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}
    assert any('"POST /auth/login" 500' in record.getMessage() for record in caplog.records)
