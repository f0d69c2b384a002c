"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
)

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# RECONCILIATION RECORDS TABLE
# ============================================================================
reconciliation_records_table = Table(
    "reconciliation_records",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("operation_kind", String(16), nullable=False),  # OperationKind as string
    Column("entity_id", String(36), nullable=False),
    Column("error_message", Text, nullable=False),
    Column("attempt_count", Integer, nullable=False, default=1),
    Column("first_failed_at", DateTime(timezone=True), nullable=False),
    Column("last_failed_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint(
        "operation_kind", "entity_id", name="uq_reconciliation_records_kind_entity"
    ),
)

Index(
    "idx_reconciliation_records_first_failed_at",
    reconciliation_records_table.c.first_failed_at,
)


# ============================================================================
# ORDERS TABLES (primary store, read-only here)
# ============================================================================
orders_table = Table(
    "orders",
    metadata,
    Column("uuid", String(36), primary_key=True),
    Column("customer_id", String, nullable=False),
    Column("status", String(32), nullable=False),  # OrderStatus as string
    Column("total", Numeric(12, 2), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

Index("idx_orders_customer_id", orders_table.c.customer_id)

order_items_table = Table(
    "order_items",
    metadata,
    Column("uuid", String(36), primary_key=True),
    Column(
        "order_uuid",
        String(36),
        ForeignKey("orders.uuid", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("position", Integer, nullable=False, default=0),
    Column("product_id", String, nullable=False),
    Column("product_name", String, nullable=False),
    Column("price", Numeric(12, 2), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("subtotal", Numeric(12, 2), nullable=False),
)

Index("idx_order_items_order_uuid", order_items_table.c.order_uuid)
