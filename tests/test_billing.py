# tests/test_billing.py
#
# Invoices, payments and shipments share the same shape: a required client,
# an optional order or invoice, and an auto-generated business number.

import re


def test_invoice_numbers_generated_and_distinct(client, make_client):
    acme = make_client()

    numbers = []
    for _ in range(2):
        res = client.post("/api/invoices", json={"clientId": acme["id"], "amount": 120})
        assert res.status_code == 201
        numbers.append(res.json()["data"]["invoiceNumber"])

    assert numbers[0] != numbers[1]
    assert all(re.fullmatch(r"INV-\d+-[0-9a-z]{9}", n) for n in numbers)


def test_duplicate_invoice_number_rejected(client, make_client):
    acme = make_client()
    payload = {"clientId": acme["id"], "amount": 10, "invoiceNumber": "INV-0001"}

    assert client.post("/api/invoices", json=payload).status_code == 201
    res = client.post("/api/invoices", json=payload)

    assert res.status_code == 400
    assert res.json()["errors"] == ["invoiceNumber already exists"]
    assert res.json()["message"] == "invoiceNumber already exists"


def test_invoice_defaults_and_client_name(client, make_client):
    acme = make_client(name="Acme")

    res = client.post("/api/invoices", json={"clientId": acme["id"], "amount": 99.99})

    data = res.json()["data"]
    assert data["clientName"] == "Acme"
    assert data["status"] == "Pending"
    assert data["amount"] == 99.99
    assert data["invoiceDate"]
    assert data["orderId"] is None


def test_invoice_order_reference_checked(client, make_client, make_order):
    acme = make_client()

    res = client.post(
        "/api/invoices",
        json={"clientId": acme["id"], "orderId": "ghost", "amount": 1},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Order not found"

    order = make_order(acme["id"])
    res = client.post(
        "/api/invoices",
        json={"clientId": acme["id"], "orderId": order["id"], "amount": 1},
    )
    assert res.status_code == 201

    # An empty string means "no order"
    res = client.post(
        "/api/invoices",
        json={"clientId": acme["id"], "orderId": "", "amount": 1},
    )
    assert res.status_code == 201
    assert res.json()["data"]["orderId"] is None


def test_invoice_update(client, make_client, make_order):
    acme = make_client()
    order = make_order(acme["id"])
    invoice = client.post(
        "/api/invoices",
        json={"clientId": acme["id"], "orderId": order["id"], "amount": 10},
    ).json()["data"]

    res = client.put(f"/api/invoices/{invoice['id']}", json={"status": "Paid", "orderId": None})

    data = res.json()["data"]
    assert data["status"] == "Paid"
    assert data["orderId"] is None
    assert data["invoiceNumber"] == invoice["invoiceNumber"]


def test_invoice_rejects_negative_amount(client, make_client):
    res = client.post("/api/invoices", json={"clientId": make_client()["id"], "amount": -1})
    assert res.status_code == 400


def test_payment_lifecycle(client, make_client):
    acme = make_client()
    invoice = client.post("/api/invoices", json={"clientId": acme["id"], "amount": 80}).json()["data"]

    res = client.post(
        "/api/payments",
        json={
            "clientId": acme["id"],
            "invoiceId": invoice["id"],
            "amount": 80,
            "paymentMethod": "Bank Transfer",
        },
    )
    assert res.status_code == 201
    payment = res.json()["data"]
    assert payment["paymentNumber"].startswith("PAY-")
    assert payment["clientName"] == acme["name"]

    res = client.put(f"/api/payments/{payment['id']}", json={"status": "Completed"})
    assert res.json()["data"]["status"] == "Completed"

    res = client.delete(f"/api/payments/{payment['id']}")
    assert res.json()["message"] == "Payment deleted successfully"


def test_payment_checks_invoice_and_method(client, make_client):
    acme = make_client()

    res = client.post(
        "/api/payments",
        json={"clientId": acme["id"], "invoiceId": "ghost", "amount": 1, "paymentMethod": "Cash"},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Invoice not found"

    res = client.post(
        "/api/payments",
        json={"clientId": acme["id"], "amount": 1, "paymentMethod": "Barter"},
    )
    assert res.status_code == 400


def test_shipment_lifecycle(client, make_client, make_order):
    acme = make_client()
    order = make_order(acme["id"])

    res = client.post(
        "/api/shipments",
        json={"clientId": acme["id"], "orderId": order["id"], "trackingNumber": "1Z999"},
    )
    assert res.status_code == 201
    shipment = res.json()["data"]
    assert shipment["shipmentNumber"].startswith("SHIP-")
    assert shipment["status"] == "Pending"

    res = client.put(f"/api/shipments/{shipment['id']}", json={"status": "In Transit"})
    assert res.json()["data"]["status"] == "In Transit"

    res = client.put(f"/api/shipments/{shipment['id']}", json={"clientId": "ghost"})
    assert res.status_code == 400
    assert res.json()["message"] == "Client not found"


def test_shipment_requires_tracking_number(client, make_client):
    res = client.post("/api/shipments", json={"clientId": make_client()["id"]})

    assert res.status_code == 400
    assert any(e.startswith("trackingNumber") for e in res.json()["errors"])


def test_unknown_ids_are_404(client):
    for resource in ("invoices", "payments", "shipments"):
        assert client.get(f"/api/{resource}/ghost").status_code == 404
        assert client.delete(f"/api/{resource}/ghost").status_code == 404
