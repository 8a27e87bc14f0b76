# tests/conftest.py

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from boxmfg import app
from boxmfg.db.engine import set_engine
from boxmfg.db.schema import metadata


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata.create_all(engine)
    set_engine(engine)
    yield engine
    set_engine(None)
    engine.dispose()


@pytest.fixture
def client(engine):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_client(client):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        payload = {
            "name": f"Acme Packaging {n}",
            "email": f"buyer{n}@acmeboxes.com",
            "phone": "555-0100",
            "address": "1 Cardboard Way",
            "city": "Springfield",
            "state": "IL",
            "zipCode": "62701",
        }
        payload.update(overrides)
        res = client.post("/api/clients", json=payload)
        assert res.status_code == 201, res.text
        return res.json()["data"]

    return _make


@pytest.fixture
def make_material(client):
    def _make(**overrides):
        payload = {
            "name": "Corrugated sheet",
            "unit": "sheets",
            "currentStock": 500,
            "price": 1.25,
            "lowStockThreshold": 50,
        }
        payload.update(overrides)
        res = client.post("/api/materials", json=payload)
        assert res.status_code == 201, res.text
        return res.json()["data"]

    return _make


@pytest.fixture
def make_product(client):
    def _make(**overrides):
        payload = {
            "name": "Shipping box 12x12",
            "description": "Single-wall corrugated box",
            "price": 3.99,
        }
        payload.update(overrides)
        res = client.post("/api/products", json=payload)
        assert res.status_code == 201, res.text
        return res.json()["data"]

    return _make


@pytest.fixture
def make_order(client):
    def _make(client_id, **overrides):
        payload = {
            "clientId": client_id,
            "deliveryDate": "2030-01-15T00:00:00Z",
        }
        payload.update(overrides)
        res = client.post("/api/orders", json=payload)
        assert res.status_code == 201, res.text
        return res.json()["data"]

    return _make
