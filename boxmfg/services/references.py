# boxmfg/services/references.py
"""
Existence checks for the foreign keys carried by write payloads.

Checks run before anything is written and stop at the first reference that
does not resolve. The resolved rows are handed back so callers can copy
display names (clientName, productName, materialName) onto the record.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import Table
from sqlalchemy.engine import Connection

from boxmfg.db.crud import fetch_one
from boxmfg.db.schema import clients, invoices, materials, orders, products
from boxmfg.errors import ReferenceNotFoundError


@dataclass(frozen=True)
class Reference:
    field: str      # snake_case key in the payload
    wire_name: str  # camelCase name reported back to the caller
    table: Table
    resource: str


CLIENT = Reference("client_id", "clientId", clients, "Client")
ORDER = Reference("order_id", "orderId", orders, "Order")
INVOICE = Reference("invoice_id", "invoiceId", invoices, "Invoice")
PRODUCT = Reference("product_id", "productId", products, "Product")
MATERIAL = Reference("material_id", "materialId", materials, "Material")

BRANCH_REFS = (CLIENT,)
ORDER_REFS = (CLIENT,)
INVOICE_REFS = (CLIENT, ORDER)
PAYMENT_REFS = (CLIENT, INVOICE)
SHIPMENT_REFS = (CLIENT, ORDER)


def resolve_one(conn: Connection, ref: Reference, ref_id: Optional[str], wire_name: Optional[str] = None) -> Mapping[str, Any]:
    row = fetch_one(conn, ref.table, ref_id)
    if row is None:
        raise ReferenceNotFoundError(ref.resource, wire_name or ref.wire_name, ref_id)
    return row


def resolve_references(
    conn: Connection,
    values: Mapping[str, Any],
    references: Sequence[Reference],
) -> Dict[str, Mapping[str, Any]]:
    """
    Look up every populated reference field in `values`.

    Absent, None and "" are skipped; whether a reference is required is the
    payload model's business, not ours. Returns {field: referenced row}.
    """
    resolved: Dict[str, Mapping[str, Any]] = {}
    for ref in references:
        ref_id = values.get(ref.field)
        if ref_id in (None, ""):
            continue
        resolved[ref.field] = resolve_one(conn, ref, ref_id)
    return resolved


def resolve_lines(
    conn: Connection,
    lines: Sequence[Mapping[str, Any]],
    ref: Reference,
    collection: str,
) -> List[Mapping[str, Any]]:
    """Resolve the reference on each line of a nested list (items, materials)."""
    rows = []
    for index, line in enumerate(lines):
        wire_name = f"{collection}[{index}].{ref.wire_name}"
        rows.append(resolve_one(conn, ref, line.get(ref.field), wire_name))
    return rows
