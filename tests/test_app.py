# tests/test_app.py

import pytest
from sqlalchemy.exc import OperationalError

from boxmfg import config
from boxmfg.db import engine as db_engine
from boxmfg.db.engine import init_db, is_degraded, set_engine


def test_health(client):
    res = client.get("/health")

    assert res.status_code == 200
    assert res.json() == {"status": "ok", "storage": "database"}


def test_end_to_end_order(client):
    acme = client.post(
        "/api/clients",
        json={
            "name": "Acme Corp",
            "email": "a@b.com",
            "phone": "555",
            "address": "1 Main St",
            "city": "Town",
            "state": "ST",
            "zipCode": "00001",
        },
    ).json()["data"]
    material = client.post(
        "/api/materials",
        json={"name": "Board", "unit": "sheets", "currentStock": 500, "lowStockThreshold": 50},
    ).json()["data"]
    product = client.post(
        "/api/products",
        json={
            "name": "Box",
            "description": "Small box",
            "price": 3.99,
            "materials": [{"materialId": material["id"], "quantity": 1}],
        },
    ).json()["data"]
    order = client.post(
        "/api/orders",
        json={
            "clientId": acme["id"],
            "deliveryDate": "2030-02-01T00:00:00Z",
            "items": [{"productId": product["id"], "quantity": 10, "unitPrice": 3.99}],
        },
    ).json()["data"]

    res = client.get(f"/api/orders/{order['id']}")
    data = res.json()["data"]

    assert data["items"][0]["totalPrice"] == 39.9
    assert data["totalAmount"] == 39.9
    assert data["clientName"] == "Acme Corp"
    assert client.get(f"/api/orders/{order['id']}").json() == res.json()


def test_falls_back_to_memory_when_database_unreachable(monkeypatch):
    broken = db_engine._build_engine("sqlite:////nonexistent-dir/for/sure/db.sqlite")
    set_engine(broken)
    monkeypatch.setattr(config, "STORAGE_FALLBACK", True)
    monkeypatch.setattr(db_engine, "_degraded", False)

    try:
        engine = init_db()
        assert engine is not broken
        assert is_degraded() is True
        assert engine.url.render_as_string() == "sqlite://"
    finally:
        set_engine(None)


def test_fallback_disabled_raises(monkeypatch):
    set_engine(db_engine._build_engine("sqlite:////nonexistent-dir/for/sure/db.sqlite"))
    monkeypatch.setattr(config, "STORAGE_FALLBACK", False)
    monkeypatch.setattr(db_engine, "_degraded", False)

    try:
        with pytest.raises(OperationalError):
            init_db()
        assert is_degraded() is False
    finally:
        set_engine(None)
