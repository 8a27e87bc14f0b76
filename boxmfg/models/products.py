# boxmfg/models/products.py

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import Field

from boxmfg.models.common import CamelModel, Money

ProductStatus = Literal["active", "inactive"]


class BomLineIn(CamelModel):
    material_id: str = Field(..., min_length=1)
    quantity: Decimal = Field(..., ge=0, decimal_places=4)
    # Unit is always taken from the material; accepted here so clients can echo it back
    unit: Optional[str] = None
    # Defaults to the material's current price when omitted
    unit_price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)


class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0, decimal_places=2)
    materials: List[BomLineIn] = []
    status: ProductStatus = "active"


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    materials: Optional[List[BomLineIn]] = None
    status: Optional[ProductStatus] = None


class BomLineOut(CamelModel):
    id: str
    material_id: str
    material_name: str
    quantity: Money
    unit: str
    unit_price: Money


class ProductOut(CamelModel):
    id: str
    name: str
    description: str
    price: Money
    materials: List[BomLineOut] = []
    status: str
    created_at: datetime
    updated_at: datetime
