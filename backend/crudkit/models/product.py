"""Product ORM: reference entity wired through the generic CRUD flow.

Invariants:
    - sku is unique among non-deleted products: ProductHooks rejects a taken sku
      with AlreadyExistsError, and the partial unique index uq_products_sku_active
      fails the losing writer of a concurrent create or update
    - A soft-deleted product's sku can be reused
    - price is non-negative (validated at the schema boundary)
"""

from decimal import Decimal

from sqlalchemy import Index, Numeric, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from crudkit.db.base import Base
from crudkit.models.entity import Entity

ACTIVE_ROWS = text("NOT is_deleted")


class Product(Entity, Base):
    __tablename__ = "products"
    __table_args__ = (
        Index(
            "uq_products_sku_active", "sku", unique=True,
            postgresql_where=ACTIVE_ROWS, sqlite_where=ACTIVE_ROWS,
        ),
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    sku: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
