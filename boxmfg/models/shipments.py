# boxmfg/models/shipments.py

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from boxmfg.models.common import CamelModel, OptionalRef, UtcDateTime

ShipmentStatus = Literal["Pending", "In Transit", "Delivered"]


class ShipmentCreate(CamelModel):
    shipment_number: Optional[str] = None
    order_id: OptionalRef = None
    client_id: str = Field(..., min_length=1)
    tracking_number: str = Field(..., min_length=1)
    shipment_date: Optional[UtcDateTime] = None
    estimated_delivery: Optional[UtcDateTime] = None
    status: ShipmentStatus = "Pending"
    notes: str = ""


class ShipmentUpdate(CamelModel):
    order_id: OptionalRef = None
    client_id: Optional[str] = Field(default=None, min_length=1)
    tracking_number: Optional[str] = Field(default=None, min_length=1)
    shipment_date: Optional[UtcDateTime] = None
    estimated_delivery: Optional[UtcDateTime] = None
    status: Optional[ShipmentStatus] = None
    notes: Optional[str] = None


class ShipmentOut(CamelModel):
    id: str
    shipment_number: str
    order_id: Optional[str] = None
    client_id: str
    client_name: str
    tracking_number: str
    shipment_date: datetime
    estimated_delivery: Optional[datetime] = None
    status: str
    notes: str
    created_at: datetime
    updated_at: datetime
