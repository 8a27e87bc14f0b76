# boxmfg/models/clients.py

from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field

from boxmfg.models.common import CamelModel

ClientStatus = Literal["active", "inactive", "pending"]


class ClientCreate(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    status: ClientStatus = "active"


class ClientUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = Field(default=None, min_length=1)
    city: Optional[str] = Field(default=None, min_length=1)
    state: Optional[str] = Field(default=None, min_length=1)
    zip_code: Optional[str] = Field(default=None, min_length=1)
    status: Optional[ClientStatus] = None


class ClientOut(CamelModel):
    id: str
    name: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    zip_code: str
    status: str
    created_at: datetime
