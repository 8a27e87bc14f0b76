# boxmfg/models/orders.py

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import Field

from boxmfg.models.common import CamelModel, Money, UtcDateTime

OrderStatus = Literal[
    "New", "Confirmed", "In Production", "Packed",
    "Partially Shipped", "Completed", "Cancelled",
]
OrderPriority = Literal["Low", "Medium", "High"]

PENDING_ORDER_STATUSES = ("New", "Confirmed", "In Production", "Packed", "Partially Shipped")


class OrderItemIn(CamelModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    unit_price: Decimal = Field(..., ge=0, decimal_places=2)
    specifications: str = ""


class OrderItemUpdate(CamelModel):
    quantity: Optional[int] = Field(default=None, ge=1)
    unit_price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    specifications: Optional[str] = None


class OrderCreate(CamelModel):
    client_id: str = Field(..., min_length=1)
    order_date: Optional[UtcDateTime] = None
    delivery_date: UtcDateTime
    status: OrderStatus = "New"
    priority: OrderPriority = "Medium"
    order_source: str = "Manual"
    notes: str = ""
    items: List[OrderItemIn] = []
    # Only honoured for orders without items; otherwise computed from the items
    total_amount: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)


class OrderUpdate(CamelModel):
    client_id: Optional[str] = Field(default=None, min_length=1)
    order_date: Optional[UtcDateTime] = None
    delivery_date: Optional[UtcDateTime] = None
    status: Optional[OrderStatus] = None
    priority: Optional[OrderPriority] = None
    order_source: Optional[str] = None
    notes: Optional[str] = None
    items: Optional[List[OrderItemIn]] = None
    total_amount: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)


class OrderItemOut(CamelModel):
    id: str
    order_id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: Money
    total_price: Money
    specifications: str
    created_at: datetime


class OrderOut(CamelModel):
    id: str
    client_id: str
    client_name: str
    order_date: datetime
    delivery_date: datetime
    status: str
    priority: str
    order_source: str
    notes: str
    items: List[OrderItemOut] = []
    total_amount: Money
    created_at: datetime
    updated_at: datetime
