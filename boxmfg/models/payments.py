# boxmfg/models/payments.py

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import Field

from boxmfg.models.common import CamelModel, Money, OptionalRef, UtcDateTime

PaymentMethod = Literal["Bank Transfer", "Cash", "Check", "Credit Card", "UPI"]
PaymentStatus = Literal["Pending", "Completed", "Failed"]


class PaymentCreate(CamelModel):
    payment_number: Optional[str] = None
    invoice_id: OptionalRef = None
    client_id: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0, decimal_places=2)
    date: Optional[UtcDateTime] = None
    payment_method: PaymentMethod
    status: PaymentStatus = "Pending"
    reference_number: str = ""
    notes: str = ""


class PaymentUpdate(CamelModel):
    invoice_id: OptionalRef = None
    client_id: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    date: Optional[UtcDateTime] = None
    payment_method: Optional[PaymentMethod] = None
    status: Optional[PaymentStatus] = None
    reference_number: Optional[str] = None
    notes: Optional[str] = None


class PaymentOut(CamelModel):
    id: str
    payment_number: str
    invoice_id: Optional[str] = None
    client_id: str
    client_name: str
    amount: Money
    date: datetime
    payment_method: str
    status: str
    reference_number: str
    notes: str
    created_at: datetime
    updated_at: datetime
