"""
Application startup/shutdown tests.

The lifespan only runs when TestClient is used as a context manager, so each
test enters one explicitly with the database and storage hooks patched.
"""

from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient

import main
from main import app
from app.config import Environment, settings


@pytest.fixture
def lifespan_mocks(monkeypatch):
    storage = Mock()
    connect = Mock(return_value=storage)
    close = Mock()
    init_db = Mock()
    monkeypatch.setattr(main, "init_database", init_db)
    monkeypatch.setattr(main.s3_adapter, "connect", connect)
    monkeypatch.setattr(main.s3_adapter, "close", close)
    return {"storage": storage, "connect": connect, "close": close, "init_db": init_db}


def test_startup_bootstraps_storage(monkeypatch, lifespan_mocks):
    monkeypatch.setattr(settings, "storage_bootstrap_on_startup", True)

    with TestClient(app) as test_client:
        lifespan_mocks["connect"].assert_called_once_with(settings.s3)
        lifespan_mocks["storage"].bootstrap.assert_called_once_with()
        lifespan_mocks["init_db"].assert_called_once_with()
        lifespan_mocks["close"].assert_not_called()
        assert test_client.get("/api/v1/health-check").status_code == 200

    lifespan_mocks["close"].assert_called_once_with()


def test_startup_skips_disabled_bootstrap(monkeypatch, lifespan_mocks):
    monkeypatch.setattr(settings, "storage_bootstrap_on_startup", False)

    with TestClient(app):
        lifespan_mocks["connect"].assert_not_called()

    lifespan_mocks["close"].assert_called_once_with()


def test_production_skips_table_creation(monkeypatch, lifespan_mocks):
    monkeypatch.setattr(settings, "storage_bootstrap_on_startup", False)
    monkeypatch.setattr(settings, "environment", Environment.PRODUCTION)

    with TestClient(app):
        lifespan_mocks["init_db"].assert_not_called()


def test_bucket_creation_failure_aborts_startup(monkeypatch, lifespan_mocks):
    monkeypatch.setattr(settings, "storage_bootstrap_on_startup", True)
    lifespan_mocks["storage"].bootstrap.side_effect = RuntimeError("bucket denied")

    with pytest.raises(RuntimeError, match="bucket denied"):
        with TestClient(app):
            pass

    lifespan_mocks["connect"].assert_called_once_with(settings.s3)
    lifespan_mocks["close"].assert_called_once_with()
