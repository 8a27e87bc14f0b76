# boxmfg/models/materials.py

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import Field

from boxmfg.models.common import CamelModel, Money

MaterialUnit = Literal["kg", "lbs", "pcs", "m", "sqm", "liters", "sheets", "rolls"]


# No status field on input: it is always derived from stock and threshold.
class MaterialCreate(CamelModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    unit: MaterialUnit
    current_stock: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=4)
    price: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    low_stock_threshold: Decimal = Field(default=Decimal("10"), ge=0, decimal_places=4)


class MaterialUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    unit: Optional[MaterialUnit] = None
    current_stock: Optional[Decimal] = Field(default=None, ge=0, decimal_places=4)
    price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    low_stock_threshold: Optional[Decimal] = Field(default=None, ge=0, decimal_places=4)


class MaterialOut(CamelModel):
    id: str
    name: str
    description: str
    unit: str
    current_stock: Money
    price: Money
    low_stock_threshold: Money
    status: str
    created_at: datetime
    updated_at: datetime
