"""Product Hooks: EntityHooks capability for the Product entity.

Invariants:
    - An active product's sku is unique; create/update colliding with another
      active product raises AlreadyExistsError before anything is written
    - Soft-deleted products never block sku reuse
"""

import logging
from typing import Sequence

from sqlalchemy import ColumnElement

from crudkit.core.errors import AlreadyExistsError, DatabaseError
from crudkit.core.repository_protocols import EntitySet
from crudkit.models.product import Product
from crudkit.schemas.product import ProductCreate, ProductFilter, ProductUpdate, ProductView

logger = logging.getLogger(__name__)


class ProductHooks:
    def __init__(self, entity_set: EntitySet[Product]):
        self._entity_set = entity_set

    async def _ensure_sku_free(self, sku: str, exclude_id: int | None = None) -> None:
        criteria = [Product.sku == sku, Product.is_deleted.is_(False)]
        if exclude_id is not None:
            criteria.append(Product.id != exclude_id)
        try:
            existing = await self._entity_set.find_one(*criteria)
        except Exception as e:
            raise DatabaseError(cause=e) from e
        if existing is not None:
            logger.info(f"Rejected duplicate sku {sku!r}", extra={"entity": "Product"})
            raise AlreadyExistsError(f"Product with sku '{sku}' already exists")

    async def before_create(self, create: ProductCreate) -> Product:
        await self._ensure_sku_free(create.sku)
        return Product(
            name=create.name,
            sku=create.sku,
            price=create.price,
            description=create.description,
        )

    async def after_create(self, entity: Product) -> None:
        pass

    async def before_update(self, update: ProductUpdate, entity: Product) -> None:
        changes = update.model_dump(exclude_unset=True)
        if changes.get("sku") and changes["sku"] != entity.sku:
            await self._ensure_sku_free(changes["sku"], exclude_id=entity.id)
        for field, value in changes.items():
            if value is None and field != "description":
                continue
            setattr(entity, field, value)

    async def after_update(self, entity: Product) -> None:
        pass

    async def before_delete(self, entity: Product) -> None:
        pass

    async def after_delete(self, entity: Product) -> None:
        pass

    def filter_criteria(self, query_filter: ProductFilter) -> Sequence[ColumnElement[bool]]:
        criteria = []
        if query_filter.name:
            criteria.append(Product.name.ilike(f"%{query_filter.name}%"))
        if query_filter.min_price is not None:
            criteria.append(Product.price >= query_filter.min_price)
        if query_filter.max_price is not None:
            criteria.append(Product.price <= query_filter.max_price)
        return criteria

    async def to_view_model(self, entity: Product) -> ProductView:
        return ProductView.model_validate(entity)

    def id_of(self, entity: Product) -> int:
        return entity.id
