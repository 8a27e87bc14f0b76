# boxmfg/models/common.py

from datetime import datetime, timezone
from decimal import Decimal
from typing import Generic, List, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, PlainSerializer
from pydantic.alias_generators import to_camel
from typing_extensions import Annotated

T = TypeVar("T")


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


# Decimal in storage and arithmetic, plain JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
UtcDateTime = Annotated[datetime, AfterValidator(_to_naive_utc)]


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        str_strip_whitespace = True


class DataResponse(CamelModel, Generic[T]):
    success: bool = True
    data: T


class ListResponse(CamelModel, Generic[T]):
    success: bool = True
    count: int
    data: List[T]


class PaginationOut(CamelModel):
    page: int
    limit: int
    total: int
    pages: int
    has_next: bool
    has_prev: bool


class PageResponse(CamelModel, Generic[T]):
    success: bool = True
    data: List[T]
    pagination: PaginationOut
    count: int


class DeletedResponse(CamelModel):
    success: bool = True
    data: dict = {}
    message: Optional[str] = None


def optional_id(value: Optional[str]) -> Optional[str]:
    """An explicit empty string for an optional reference means 'absent'."""
    if value is None:
        return None
    value = value.strip()
    return value or None


OptionalRef = Annotated[Optional[str], AfterValidator(optional_id)]


def supplied_fields(payload: BaseModel, clearable=()) -> dict:
    """
    Fields the caller actually sent, for a partial update.

    The update model is the whitelist. A null is treated as "not sent" except
    for fields in `clearable`, where it clears the stored value.
    """
    data = payload.model_dump(exclude_unset=True)
    return {k: v for k, v in data.items() if v is not None or k in clearable}
