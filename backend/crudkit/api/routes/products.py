"""Product Routes: /api/v1/products wired through the generic CRUD router."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from crudkit.api.crud_controller import CrudController
from crudkit.api.crud_router import build_crud_router
from crudkit.infrastructure.database import get_db
from crudkit.infrastructure.entity_set import SqlAlchemyEntitySet
from crudkit.models.product import Product
from crudkit.schemas.product import ProductCreate, ProductFilter, ProductUpdate, ProductView
from crudkit.services.crud_service import CrudService
from crudkit.services.product_hooks import ProductHooks


def get_product_controller(db: AsyncSession = Depends(get_db)) -> CrudController:
    """Per-request controller bound to the request's DB session."""
    entity_set = SqlAlchemyEntitySet(db, Product)
    hooks = ProductHooks(entity_set)
    return CrudController(CrudService(entity_set, hooks), hooks)


router = build_crud_router(
    name="product",
    prefix="/api/v1/products",
    tags=["products"],
    controller_dependency=get_product_controller,
    create_schema=ProductCreate,
    update_schema=ProductUpdate,
    filter_schema=ProductFilter,
    view_schema=ProductView,
)
