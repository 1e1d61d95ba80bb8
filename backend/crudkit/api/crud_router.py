"""CRUD Router Factory: one APIRouter per entity type from a controller dependency.

Invariants:
    - GET ""           → controller.get_list(filter from query params)
    - GET "/{id}"      → controller.get(id), route named "get_<name>"
    - POST ""          → controller.create(body), 201 + Location of "get_<name>"
    - PUT "/{id}"      → controller.update(id, body)
    - DELETE "/{id}"   → controller.delete(id), 204
    - Every route returns api/responses.to_response(envelope)
    - {id} is bounded to the BIGINT range; out-of-range ids are rejected as
      request validation errors before the store is queried

Design Decisions:
    - Schemas passed in as classes; endpoint signatures are built in the closure so
      FastAPI sees the concrete body/query/view types for validation and OpenAPI
"""

from typing import Annotated, Any, Callable

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status

from crudkit.api.crud_controller import CrudController
from crudkit.api.responses import Location, to_response

BIGINT_MAX = 2**63 - 1

# Ids the store column can hold; anything else is a ValidationError envelope.
EntityId = Annotated[int, Path(ge=1, le=BIGINT_MAX)]


def build_crud_router(
    *,
    name: str,
    prefix: str,
    controller_dependency: Callable[..., CrudController],
    create_schema: type,
    update_schema: type,
    filter_schema: type,
    view_schema: type,
    tags: list[str] | None = None,
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=tags or [name])
    get_route_name = f"get_{name}"
    no_content: dict[int | str, dict[str, Any]] = {
        status.HTTP_204_NO_CONTENT: {"description": "Nothing to return"},
    }
    ControllerDep = Annotated[CrudController, Depends(controller_dependency)]

    @router.get(
        "", name=f"list_{name}",
        response_model=list[view_schema], responses=no_content,
    )
    async def list_entities(
        query_filter: Annotated[filter_schema, Query()],
        controller: ControllerDep,
    ) -> Response:
        return to_response(await controller.get_list(query_filter))

    @router.get(
        "/{entity_id}", name=get_route_name,
        response_model=view_schema, responses=no_content,
    )
    async def get_entity(entity_id: EntityId, controller: ControllerDep) -> Response:
        return to_response(await controller.get(entity_id))

    @router.post(
        "", name=f"create_{name}",
        response_model=view_schema, status_code=status.HTTP_201_CREATED,
    )
    async def create_entity(
        body: create_schema, request: Request, controller: ControllerDep,
    ) -> Response:
        result = await controller.create(body)
        location = Location(get_route_name, {"entity_id": result.result.data.id})
        return to_response(result, location, request)

    @router.put("/{entity_id}", name=f"update_{name}", response_model=view_schema)
    async def update_entity(
        entity_id: EntityId, body: update_schema, controller: ControllerDep,
    ) -> Response:
        return to_response(await controller.update(entity_id, body))

    @router.delete(
        "/{entity_id}", name=f"delete_{name}",
        status_code=status.HTTP_204_NO_CONTENT,
    )
    async def delete_entity(entity_id: EntityId, controller: ControllerDep) -> Response:
        return to_response(await controller.delete(entity_id))

    return router
