"""Boundary Protocols: contracts between the generic CRUD flow and its collaborators.

Invariants:
    - EntitySet is the only way the CRUD service touches the store
    - EntityHooks is implemented once per entity type; the generic flow never
      subclasses or inspects entities beyond id_of() and the Entity columns
    - All store and hook methods are async except id_of and filter_criteria

Design Decisions:
    - Protocol over ABC: structural subtyping, integrations need no base class
    - Criteria are SQLAlchemy column expressions built from typed mapped
      attributes (Entity.id, Entity.is_deleted), not from field names
"""

from typing import Any, Protocol, Sequence, TypeVar

from sqlalchemy import ColumnElement

E = TypeVar("E")
C = TypeVar("C", contravariant=True)
U = TypeVar("U", contravariant=True)
F = TypeVar("F", contravariant=True)
V = TypeVar("V", covariant=True)


class EntitySet(Protocol[E]):
    """Async accessor over one entity table."""
    model: type[E]

    async def find_one(self, *criteria: ColumnElement[bool]) -> E | None: ...
    async def find_all(self, *criteria: ColumnElement[bool]) -> list[E]: ...
    async def add(self, entity: E) -> None: ...
    async def update(self, entity: E) -> None: ...
    async def save(self) -> None: ...


class EntityHooks(Protocol[E, C, U, F, V]):
    """Per-entity-type capability plugged into CrudService and CrudController.

    before_create turns a create request into a persistable entity,
    before_update applies an update request onto a fetched entity.
    Raising a DomainError from any before-hook aborts the operation
    before the store is written.
    """

    async def before_create(self, create: C) -> E: ...
    async def after_create(self, entity: E) -> None: ...
    async def before_update(self, update: U, entity: E) -> None: ...
    async def after_update(self, entity: E) -> None: ...
    async def before_delete(self, entity: E) -> None: ...
    async def after_delete(self, entity: E) -> None: ...

    def filter_criteria(self, query_filter: F) -> Sequence[ColumnElement[bool]]: ...
    async def to_view_model(self, entity: E) -> V: ...
    def id_of(self, entity: E) -> Any: ...
