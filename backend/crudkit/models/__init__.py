"""ORM Models: SQLAlchemy declarative models for all entities.

Invariants:
    - Every entity model inherits from Base and the Entity mixin
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from crudkit.models.product import Product  # noqa: F401
