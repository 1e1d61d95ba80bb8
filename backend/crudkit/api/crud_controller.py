"""Generic CRUD Controller: one HTTP verb → one CrudService operation → one envelope.

Invariants:
    - Empty list → NoContent with [] payload; missing id → NoContent with None payload
    - Create → Created with the projected entity; update → Ok; delete → bare NoContent
    - Failures are not caught here; they reach the error boundary
"""

from typing import Any, Generic, TypeVar

from crudkit.core.repository_protocols import EntityHooks
from crudkit.core.results import ServiceResult
from crudkit.services.crud_service import CrudService

E = TypeVar("E")
C = TypeVar("C")
U = TypeVar("U")
F = TypeVar("F")
V = TypeVar("V")


class CrudController(Generic[E, C, U, F, V]):
    def __init__(
        self,
        service: CrudService[E, C, U, F],
        hooks: EntityHooks[E, C, U, F, V],
    ):
        self.service = service
        self._hooks = hooks

    async def get_list(self, query_filter: F) -> ServiceResult[list[V]]:
        entities = await self.service.get_list(query_filter)
        if not entities:
            return ServiceResult.no_content([])
        return ServiceResult.ok(
            [await self._hooks.to_view_model(entity) for entity in entities],
        )

    async def get(self, entity_id: Any) -> ServiceResult[V]:
        entity = await self.service.get_by_id(entity_id)
        if entity is None:
            return ServiceResult.no_content(None)
        return ServiceResult.ok(await self._hooks.to_view_model(entity))

    async def create(self, create: C) -> ServiceResult[V]:
        entity = await self.service.create(create)
        return ServiceResult.created(await self._hooks.to_view_model(entity))

    async def update(self, entity_id: Any, update: U) -> ServiceResult[V]:
        entity = await self.service.update(entity_id, update)
        return ServiceResult.ok(await self._hooks.to_view_model(entity))

    async def delete(self, entity_id: Any) -> ServiceResult:
        await self.service.delete(entity_id)
        return ServiceResult.no_content()
