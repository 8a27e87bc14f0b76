# boxmfg/models/dashboard.py

from datetime import datetime
from decimal import Decimal
from typing import List

from boxmfg.models.common import CamelModel, Money


class RecentOrder(CamelModel):
    id: str
    client_id: str
    client_name: str
    order_date: datetime
    delivery_date: datetime
    status: str
    priority: str
    total_amount: Money
    created_at: datetime


class RecentPayment(CamelModel):
    id: str
    payment_number: str
    client_id: str
    client_name: str
    amount: Money
    date: datetime
    payment_method: str
    status: str
    created_at: datetime


class LowStockItem(CamelModel):
    id: str
    name: str
    current_stock: Money
    low_stock_threshold: Money
    unit: str


class MonthlyRevenue(CamelModel):
    month: str
    year: int
    revenue: Money


class DashboardStats(CamelModel):
    total_orders: int = 0
    pending_orders: int = 0
    completed_orders: int = 0
    total_clients: int = 0
    active_clients: int = 0
    total_materials: int = 0
    low_stock_materials: int = 0
    total_revenue: Money = Decimal("0")
    pending_payments: int = 0
    recent_orders: List[RecentOrder] = []
    recent_payments: List[RecentPayment] = []
    low_stock_items: List[LowStockItem] = []
    monthly_revenue: List[MonthlyRevenue] = []
