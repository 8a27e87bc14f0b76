# tests/test_clients.py


def test_create_and_get_client(client, make_client):
    created = make_client(name="Northwind Boxes")

    assert created["id"]
    assert created["status"] == "active"
    assert created["zipCode"] == "62701"
    assert "createdAt" in created

    res = client.get(f"/api/clients/{created['id']}")
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["data"]["name"] == "Northwind Boxes"


def test_missing_client_is_404(client):
    res = client.get("/api/clients/nope")

    assert res.status_code == 404
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Client not found"


def test_duplicate_email_rejected(client, make_client):
    make_client(email="orders@shared.com")

    res = client.post(
        "/api/clients",
        json={
            "name": "Other",
            "email": "orders@shared.com",
            "phone": "1",
            "address": "2 Road",
            "city": "X",
            "state": "Y",
            "zipCode": "1",
        },
    )

    assert res.status_code == 400
    assert res.json()["message"] == "email already exists"


def test_validation_reports_every_field(client):
    res = client.post("/api/clients", json={"name": "", "email": "not-an-email"})

    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["message"] == ", ".join(body["errors"])
    assert "zipCode: Field required" in body["message"]
    fields = {e.split(":")[0] for e in body["errors"]}
    assert {"name", "email", "phone", "address", "city", "state", "zipCode"} <= fields


def test_list_clients_paginates(client, make_client):
    for _ in range(12):
        make_client()

    res = client.get("/api/clients", params={"page": 2, "limit": 5})
    body = res.json()

    assert res.status_code == 200
    assert body["count"] == 5
    assert body["pagination"] == {
        "page": 2,
        "limit": 5,
        "total": 12,
        "pages": 3,
        "hasNext": True,
        "hasPrev": True,
    }


def test_pages_cover_every_client_once(client, make_client):
    ids = {make_client()["id"] for _ in range(7)}

    seen = []
    for page in (1, 2, 3):
        res = client.get("/api/clients", params={"page": page, "limit": 3})
        seen.extend(c["id"] for c in res.json()["data"])

    assert len(seen) == 7
    assert set(seen) == ids


def test_bad_query_values_fall_back_to_defaults(client, make_client):
    make_client()

    res = client.get("/api/clients", params={"page": "abc", "limit": "lots"})
    pagination = res.json()["pagination"]

    assert res.status_code == 200
    assert pagination["page"] == 1
    assert pagination["limit"] == 10


def test_update_client_partial(client, make_client):
    created = make_client(city="Springfield")

    res = client.put(f"/api/clients/{created['id']}", json={"city": "Shelbyville"})

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["city"] == "Shelbyville"
    assert data["name"] == created["name"]


def test_update_missing_client_is_404(client):
    res = client.put("/api/clients/nope", json={"city": "X"})
    assert res.status_code == 404


def test_delete_client(client, make_client):
    created = make_client()

    res = client.delete(f"/api/clients/{created['id']}")
    assert res.status_code == 200
    assert res.json() == {"success": True, "data": {}, "message": "Client deleted successfully"}

    assert client.get(f"/api/clients/{created['id']}").status_code == 404
    assert client.delete(f"/api/clients/{created['id']}").status_code == 404


def test_client_sub_resources(client, make_client, make_order):
    acme = make_client()
    other = make_client()

    client.post(
        "/api/branches",
        json={"name": "East plant", "location": "Dock 4", "clientId": acme["id"]},
    )
    make_order(acme["id"])
    make_order(acme["id"])
    make_order(other["id"])
    client.post(
        "/api/payments",
        json={"clientId": acme["id"], "amount": 50, "paymentMethod": "Cash"},
    )

    branches = client.get(f"/api/clients/{acme['id']}/branches").json()
    assert branches["count"] == 1
    assert branches["data"][0]["clientName"] == acme["name"]

    orders = client.get(f"/api/clients/{acme['id']}/orders").json()
    assert orders["pagination"]["total"] == 2
    assert all(o["clientId"] == acme["id"] for o in orders["data"])

    payments = client.get(f"/api/clients/{acme['id']}/payments").json()
    assert payments["count"] == 1
    assert payments["data"][0]["amount"] == 50.0


def test_orders_of_unknown_client_is_404(client):
    assert client.get("/api/clients/nope/orders").status_code == 404
