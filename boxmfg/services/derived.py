# boxmfg/services/derived.py

import random
import string
import time
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

ZERO = Decimal("0")
CENT = Decimal("0.01")

_BASE36 = string.digits + string.ascii_lowercase
_rng = random.SystemRandom()


def material_status(current_stock, low_stock_threshold) -> str:
    stock = Decimal(current_stock)
    if stock <= 0:
        return "out_of_stock"
    if stock <= Decimal(low_stock_threshold):
        return "low_stock"
    return "in_stock"


def line_total(quantity, unit_price) -> Decimal:
    return (Decimal(quantity) * Decimal(unit_price)).quantize(CENT)


def price_items(items: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """Copy each item with its totalPrice filled in."""
    priced = []
    for item in items:
        item = dict(item)
        item["total_price"] = line_total(item["quantity"], item["unit_price"])
        priced.append(item)
    return priced


def order_total(items: Iterable[Mapping[str, Any]], current: Optional[Decimal] = None) -> Decimal:
    """
    Sum of the items' totalPrice.

    An order with no items keeps whatever total it already has (0 for a new
    order).
    """
    items = list(items)
    if not items:
        return current if current is not None else ZERO
    total = sum((Decimal(item["total_price"]) for item in items), ZERO)
    return total.quantize(CENT)


def business_number(prefix: str) -> str:
    """e.g. INV-1718000000000-k3j9x0a2b: epoch milliseconds plus 9 random base36 chars."""
    suffix = "".join(_rng.choice(_BASE36) for _ in range(9))
    return f"{prefix}-{int(time.time() * 1000)}-{suffix}"


def invoice_number() -> str:
    return business_number("INV")


def payment_number() -> str:
    return business_number("PAY")


def shipment_number() -> str:
    return business_number("SHIP")
