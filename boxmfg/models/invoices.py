# boxmfg/models/invoices.py

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import Field

from boxmfg.models.common import CamelModel, Money, OptionalRef, UtcDateTime

InvoiceStatus = Literal["Pending", "Paid", "Overdue"]


class InvoiceCreate(CamelModel):
    invoice_number: Optional[str] = None
    order_id: OptionalRef = None
    client_id: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0, decimal_places=2)
    invoice_date: Optional[UtcDateTime] = None
    due_date: Optional[UtcDateTime] = None
    status: InvoiceStatus = "Pending"
    notes: str = ""


# invoiceNumber is fixed at creation
class InvoiceUpdate(CamelModel):
    order_id: OptionalRef = None
    client_id: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    invoice_date: Optional[UtcDateTime] = None
    due_date: Optional[UtcDateTime] = None
    status: Optional[InvoiceStatus] = None
    notes: Optional[str] = None


class InvoiceOut(CamelModel):
    id: str
    invoice_number: str
    order_id: Optional[str] = None
    client_id: str
    client_name: str
    amount: Money
    invoice_date: datetime
    due_date: Optional[datetime] = None
    status: str
    notes: str
    created_at: datetime
    updated_at: datetime
