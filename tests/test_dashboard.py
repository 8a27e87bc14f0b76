# tests/test_dashboard.py

from datetime import datetime

from boxmfg.db.crud import insert_row
from boxmfg.db.schema import orders
from boxmfg.services.dashboard import get_stats, revenue_window_start


def test_empty_database_gives_zeroes(client):
    res = client.get("/api/dashboard/stats")

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["totalOrders"] == 0
    assert data["totalRevenue"] == 0
    assert data["recentOrders"] == []
    assert data["lowStockItems"] == []
    assert data["monthlyRevenue"] == []


def test_order_status_counts(client, make_client, make_order):
    acme = make_client()
    for status in ("New", "Confirmed", "Completed"):
        make_order(acme["id"], status=status)

    data = client.get("/api/dashboard/stats").json()["data"]

    assert data["totalOrders"] == 3
    assert data["pendingOrders"] == 2
    assert data["completedOrders"] == 1
    assert len(data["recentOrders"]) == 3


def test_clients_materials_and_payments(client, make_client, make_material):
    acme = make_client()
    make_client(status="inactive")
    make_material(name="Plenty", currentStock=500, lowStockThreshold=50)
    make_material(name="Short", currentStock=5, lowStockThreshold=50)
    make_material(name="Edge", currentStock=50, lowStockThreshold=50)

    for amount, status in ((100, "Completed"), (20.5, "Pending"), (5, "Failed")):
        client.post(
            "/api/payments",
            json={"clientId": acme["id"], "amount": amount, "paymentMethod": "Cash", "status": status},
        )

    data = client.get("/api/dashboard/stats").json()["data"]

    assert data["totalClients"] == 2
    assert data["activeClients"] == 1
    assert data["totalMaterials"] == 3
    assert data["lowStockMaterials"] == 2
    assert sorted(m["name"] for m in data["lowStockItems"]) == ["Edge", "Short"]
    assert data["totalRevenue"] == 125.5
    assert data["pendingPayments"] == 1
    assert len(data["recentPayments"]) == 3


def test_recent_orders_limited_and_dangling_client(client, make_client, make_order):
    acme = make_client()
    for _ in range(6):
        make_order(acme["id"])
    client.delete(f"/api/clients/{acme['id']}")

    recent = client.get("/api/dashboard/stats").json()["data"]["recentOrders"]

    assert len(recent) == 5
    assert {o["clientName"] for o in recent} == {"Unknown Client"}


def test_revenue_window_start():
    assert revenue_window_start(datetime(2024, 6, 15)) == datetime(2024, 1, 1)
    assert revenue_window_start(datetime(2024, 3, 2)) == datetime(2023, 10, 1)


def test_monthly_revenue_buckets(engine):
    def order(when, total):
        return {
            "client_id": "c1",
            "client_name": "Acme",
            "order_date": when,
            "delivery_date": when,
            "total_amount": total,
        }

    with engine.begin() as conn:
        insert_row(conn, orders, order(datetime(2023, 12, 31), 999))
        insert_row(conn, orders, order(datetime(2024, 1, 5), 100))
        insert_row(conn, orders, order(datetime(2024, 1, 20), 50))
        insert_row(conn, orders, order(datetime(2024, 4, 1), 10))

    with engine.connect() as conn:
        stats = get_stats(conn, now=datetime(2024, 6, 15))

    buckets = [(b["year"], b["month"], float(b["revenue"])) for b in stats["monthly_revenue"]]
    assert buckets == [(2024, "Jan", 150.0), (2024, "Apr", 10.0)]
