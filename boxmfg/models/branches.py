# boxmfg/models/branches.py

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from boxmfg.models.common import CamelModel

BranchStatus = Literal["active", "inactive"]


class BranchCreate(CamelModel):
    name: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    manager: str = ""
    phone: str = ""
    client_id: str = Field(..., min_length=1)
    status: BranchStatus = "active"


class BranchUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    location: Optional[str] = Field(default=None, min_length=1)
    manager: Optional[str] = None
    phone: Optional[str] = None
    client_id: Optional[str] = Field(default=None, min_length=1)
    status: Optional[BranchStatus] = None


class BranchOut(CamelModel):
    id: str
    name: str
    location: str
    manager: str
    phone: str
    client_id: str
    client_name: str
    status: str
    created_at: datetime
    updated_at: datetime
