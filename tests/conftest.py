"""
conftest.py - Shared fixtures for the price store tests.
"""
import os
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from pricetracker.api import create_app
from pricetracker.store import PriceStore


@pytest.fixture
def store():
    """An empty store."""
    return PriceStore()


@pytest.fixture
def seeded_store():
    """A store holding the default startup items."""
    return PriceStore({"shoes": Decimal("50"), "socks": Decimal("5")})


@pytest.fixture
def client(seeded_store):
    """HTTP client bound to an app serving the seeded store."""
    app = create_app(store=seeded_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point the home directory at a temp dir and clear app env vars."""
    monkeypatch.setenv("HOME", str(tmp_path))
    for var in ("DEBUG", "LOGLEVEL"):
        monkeypatch.delenv(var, raising=False)
    for var in [key for key in os.environ if key.upper().startswith("PRICETRACK_")]:
        monkeypatch.delenv(var)
    return tmp_path
