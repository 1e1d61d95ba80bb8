"""Generic CRUD Service: entity-agnostic get/list/create/update/delete workflow.

Invariants:
    - Lookups always exclude soft-deleted rows (is_deleted = false)
    - Write order is before-hook → persist → after-hook; a failed or cancelled
      persist never reaches the after-hook
    - Store faults become DatabaseError with the fault as cause; DomainErrors
      raised by hooks and asyncio.CancelledError propagate unchanged
    - Update/delete of a missing id raises NotFoundError before any hook runs
    - Create/update return the entity as re-read from the store
    - Holds no state beyond its entity set and hooks (one instance per request)

Design Decisions:
    - Hooks injected as an EntityHooks capability, no subclass overriding
    - List applies hooks.filter_criteria(filter); there is no "ignore the filter" default
"""

import logging
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement

from crudkit.core.errors import DatabaseError, NotFoundError
from crudkit.core.repository_protocols import EntityHooks, EntitySet

logger = logging.getLogger(__name__)

E = TypeVar("E")
C = TypeVar("C")
U = TypeVar("U")
F = TypeVar("F")


class CrudService(Generic[E, C, U, F]):
    """Generic CRUD workflow over one entity set."""

    def __init__(self, entity_set: EntitySet[E], hooks: EntityHooks[E, C, U, F, Any]):
        self._entity_set = entity_set
        self._hooks = hooks

    @property
    def _entity_name(self) -> str:
        return self._entity_set.model.__name__

    def _not_deleted(self) -> ColumnElement[bool]:
        return self._entity_set.model.is_deleted.is_(False)

    def _database_error(self, operation: str, exc: Exception) -> DatabaseError:
        logger.error(
            f"{self._entity_name} {operation} failed: {exc}",
            extra={"entity": self._entity_name},
        )
        return DatabaseError(cause=exc)

    async def get_by_id(self, entity_id: Any) -> E | None:
        """Active entity with this id, or None."""
        try:
            return await self._entity_set.find_one(
                self._entity_set.model.id == entity_id, self._not_deleted(),
            )
        except Exception as e:
            raise self._database_error("get", e) from e

    async def get_list(self, query_filter: F) -> list[E]:
        criteria = list(self._hooks.filter_criteria(query_filter))
        try:
            return await self._entity_set.find_all(self._not_deleted(), *criteria)
        except Exception as e:
            raise self._database_error("list", e) from e

    async def create(self, create: C) -> E:
        entity = await self._hooks.before_create(create)
        try:
            await self._entity_set.add(entity)
            await self._entity_set.save()
        except Exception as e:
            raise self._database_error("create", e) from e

        await self._hooks.after_create(entity)
        entity_id = self._hooks.id_of(entity)
        logger.info(
            f"{self._entity_name} created",
            extra={"entity": self._entity_name, "entity_id": entity_id},
        )
        return await self._refetch(entity_id)

    async def update(self, entity_id: Any, update: U) -> E:
        entity = await self._get_or_raise(entity_id)
        await self._hooks.before_update(update, entity)
        try:
            await self._entity_set.update(entity)
            await self._entity_set.save()
        except Exception as e:
            raise self._database_error("update", e) from e

        await self._hooks.after_update(entity)
        return await self._refetch(self._hooks.id_of(entity))

    async def delete(self, entity_id: Any) -> None:
        """Soft-delete: the row is kept with is_deleted = True."""
        entity = await self._get_or_raise(entity_id)
        await self._hooks.before_delete(entity)
        entity.is_deleted = True
        try:
            await self._entity_set.update(entity)
            await self._entity_set.save()
        except Exception as e:
            raise self._database_error("delete", e) from e

        await self._hooks.after_delete(entity)
        logger.info(
            f"{self._entity_name} deleted",
            extra={"entity": self._entity_name, "entity_id": entity_id},
        )

    async def _get_or_raise(self, entity_id: Any) -> E:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError()
        return entity

    async def _refetch(self, entity_id: Any) -> E:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            # Persisted but no longer visible: an after-hook soft-deleted it
            # or the row vanished between commit and re-read.
            raise NotFoundError()
        return entity
