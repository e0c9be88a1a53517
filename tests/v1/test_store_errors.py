"""Tests for how data store failures are reported to clients."""

from unittest.mock import MagicMock

import pytest
from fastapi import status
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from tests.conftest import auth_headers
from waste_cycle.core.settings import settings
from waste_cycle.db.session import get_db


@pytest.fixture()
def failing_store(app):
    """Replace the session with one whose lookups raise ``error``."""

    def _install(error: Exception) -> MagicMock:
        session = MagicMock()
        session.get.side_effect = error
        app.dependency_overrides[get_db] = lambda: session
        return session

    return _install


def test_unavailable_store_is_retryable(client, failing_store) -> None:
    failing_store(OperationalError("SELECT 1", {}, Exception("connection refused")))

    r = client.get("/api/v1/chat", headers=auth_headers("u1"))

    assert r.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert r.json()["kind"] == "StoreUnavailable"
    assert r.headers["Retry-After"] == str(settings.store_retry_after_seconds)


def test_other_store_failures_are_internal_errors(client, failing_store) -> None:
    failing_store(SQLAlchemyError("constraint check failed"))

    r = client.get("/api/v1/chat", headers=auth_headers("u1"))

    assert r.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert r.json()["kind"] == "StoreError"
