# boxmfg/db/schema.py

# References between tables are plain indexed id columns, not database
# foreign keys: deleting a client, order, product or material never cascades
# and never fails because dependents still point at it.

from sqlalchemy import (
    MetaData, Table, Column, Integer, String,
    Numeric, DateTime, CheckConstraint, Text
)

metadata = MetaData()

ID = String(32)
MONEY = Numeric(18, 2)
# Stock levels and bill-of-materials quantities
QUANTITY = Numeric(18, 4)


def _id_column():
    return Column("id", ID, primary_key=True)


def _timestamps():
    return [
        Column("created_at", DateTime, nullable=False, index=True),
        Column("updated_at", DateTime, nullable=False),
    ]


clients = Table(
    "clients",
    metadata,
    _id_column(),
    Column("name", String(200), nullable=False),
    Column("email", String(320), nullable=False, unique=True),
    Column("phone", String(50), nullable=False),
    Column("address", Text, nullable=False),
    Column("city", String(100), nullable=False),
    Column("state", String(100), nullable=False),
    Column("zip_code", String(20), nullable=False),
    Column("status", String(20), nullable=False, default="active"),
    Column("created_at", DateTime, nullable=False, index=True),
)

branches = Table(
    "branches",
    metadata,
    _id_column(),
    Column("name", String(200), nullable=False),
    Column("location", Text, nullable=False),
    Column("manager", String(200), nullable=False, default=""),
    Column("phone", String(50), nullable=False, default=""),
    Column("client_id", ID, nullable=False, index=True),
    Column("client_name", String(200), nullable=False),
    Column("status", String(20), nullable=False, default="active"),
    *_timestamps(),
)

materials = Table(
    "materials",
    metadata,
    _id_column(),
    Column("name", String(200), nullable=False),
    Column("description", Text, nullable=False, default=""),
    Column("unit", String(20), nullable=False),
    Column("current_stock", QUANTITY, nullable=False, default=0),
    Column("price", MONEY, nullable=False, default=0),
    Column("low_stock_threshold", QUANTITY, nullable=False, default=10),
    Column("status", String(20), nullable=False),
    *_timestamps(),
    CheckConstraint("current_stock >= 0", name="ck_materials_current_stock_nonneg"),
    CheckConstraint("price >= 0", name="ck_materials_price_nonneg"),
    CheckConstraint("low_stock_threshold >= 0", name="ck_materials_threshold_nonneg"),
)

products = Table(
    "products",
    metadata,
    _id_column(),
    Column("name", String(200), nullable=False),
    Column("description", Text, nullable=False),
    Column("price", MONEY, nullable=False),
    Column("status", String(20), nullable=False, default="active"),
    *_timestamps(),
    CheckConstraint("price >= 0", name="ck_products_price_nonneg"),
)

# Bill of materials: a snapshot of each material at the time it was attached
product_materials = Table(
    "product_materials",
    metadata,
    _id_column(),
    Column("product_id", ID, nullable=False, index=True),
    Column("position", Integer, nullable=False),
    Column("material_id", ID, nullable=False),
    Column("material_name", String(200), nullable=False),
    Column("quantity", QUANTITY, nullable=False),
    Column("unit", String(20), nullable=False),
    Column("unit_price", MONEY, nullable=False),
    CheckConstraint("quantity >= 0", name="ck_product_materials_quantity_nonneg"),
    CheckConstraint("unit_price >= 0", name="ck_product_materials_unit_price_nonneg"),
)

orders = Table(
    "orders",
    metadata,
    _id_column(),
    Column("client_id", ID, nullable=False, index=True),
    Column("client_name", String(200), nullable=False),
    Column("order_date", DateTime, nullable=False, index=True),
    Column("delivery_date", DateTime, nullable=False),
    Column("status", String(30), nullable=False, default="New"),
    Column("priority", String(10), nullable=False, default="Medium"),
    Column("order_source", String(100), nullable=False, default="Manual"),
    Column("notes", Text, nullable=False, default=""),
    Column("total_amount", MONEY, nullable=False, default=0),
    *_timestamps(),
    CheckConstraint("total_amount >= 0", name="ck_orders_total_amount_nonneg"),
)

order_items = Table(
    "order_items",
    metadata,
    _id_column(),
    Column("order_id", ID, nullable=False, index=True),
    Column("position", Integer, nullable=False),
    Column("product_id", ID, nullable=False),
    Column("product_name", String(200), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("unit_price", MONEY, nullable=False),
    Column("total_price", MONEY, nullable=False),
    Column("specifications", Text, nullable=False, default=""),
    Column("created_at", DateTime, nullable=False),
    CheckConstraint("quantity >= 1", name="ck_order_items_quantity_min"),
    CheckConstraint("unit_price >= 0", name="ck_order_items_unit_price_nonneg"),
    CheckConstraint("total_price >= 0", name="ck_order_items_total_price_nonneg"),
)

invoices = Table(
    "invoices",
    metadata,
    _id_column(),
    Column("invoice_number", String(64), unique=True, nullable=False),
    Column("order_id", ID, nullable=True, index=True),
    Column("client_id", ID, nullable=False, index=True),
    Column("client_name", String(200), nullable=False),
    Column("amount", MONEY, nullable=False),
    Column("invoice_date", DateTime, nullable=False),
    Column("due_date", DateTime, nullable=True),
    Column("status", String(20), nullable=False, default="Pending"),
    Column("notes", Text, nullable=False, default=""),
    *_timestamps(),
    CheckConstraint("amount >= 0", name="ck_invoices_amount_nonneg"),
)

payments = Table(
    "payments",
    metadata,
    _id_column(),
    Column("payment_number", String(64), unique=True, nullable=False),
    Column("invoice_id", ID, nullable=True, index=True),
    Column("client_id", ID, nullable=False, index=True),
    Column("client_name", String(200), nullable=False),
    Column("amount", MONEY, nullable=False),
    Column("date", DateTime, nullable=False),
    Column("payment_method", String(20), nullable=False),
    Column("status", String(20), nullable=False, default="Pending"),
    Column("reference_number", String(100), nullable=False, default=""),
    Column("notes", Text, nullable=False, default=""),
    *_timestamps(),
    CheckConstraint("amount >= 0", name="ck_payments_amount_nonneg"),
)

shipments = Table(
    "shipments",
    metadata,
    _id_column(),
    Column("shipment_number", String(64), unique=True, nullable=False),
    Column("order_id", ID, nullable=True, index=True),
    Column("client_id", ID, nullable=False, index=True),
    Column("client_name", String(200), nullable=False),
    Column("tracking_number", String(100), nullable=False),
    Column("shipment_date", DateTime, nullable=False),
    Column("estimated_delivery", DateTime, nullable=True),
    Column("status", String(20), nullable=False, default="Pending"),
    Column("notes", Text, nullable=False, default=""),
    *_timestamps(),
)
