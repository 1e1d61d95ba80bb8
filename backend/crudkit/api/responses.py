"""Result-to-Transport Mapper: renders ServiceResult envelopes as HTTP responses.

Invariants:
    - to_response(): success → envelope status + raw payload (no body for 204),
      Location header when given; failure → envelope status + ErrorModel.message only
    - envelope_response(): full envelope body (ServiceResult.to_body()), used by the
      error boundary so clients get traceId and code
    - Rendering is deterministic: same envelope → same status, headers and body

Design Decisions:
    - Location as a literal path or a (route name, path params) pair resolved
      with request.url_for against the current app
"""

from dataclasses import dataclass, field
from typing import Any

from fastapi import Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from crudkit.core.results import HttpStatus, ServiceResult


@dataclass(frozen=True)
class Location:
    """Route reference resolved to a Location header at render time."""
    route_name: str
    path_params: dict[str, Any] = field(default_factory=dict)

    def resolve(self, request: Request) -> str:
        params = {key: str(value) for key, value in self.path_params.items()}
        return request.url_for(self.route_name, **params).path


def _resolve_location(
    location: str | Location | None, request: Request | None,
) -> str | None:
    if location is None:
        return None
    if isinstance(location, Location):
        if request is None:
            raise ValueError("a route Location needs the current request to resolve")
        return location.resolve(request)
    return location or None


def to_response(
    result: ServiceResult,
    location: str | Location | None = None,
    request: Request | None = None,
) -> Response:
    """Render an envelope as status + payload (the per-route path)."""
    if result.is_success:
        headers = {}
        location_path = _resolve_location(location, request)
        if location_path:
            headers["Location"] = location_path
        if result.status == HttpStatus.NO_CONTENT:
            return Response(status_code=int(HttpStatus.NO_CONTENT), headers=headers)
        return JSONResponse(
            status_code=int(result.status),
            content=jsonable_encoder(result.result.data),
            headers=headers,
        )

    message = result.error_result.data.message
    if message is None:
        return Response(status_code=int(result.status))
    return JSONResponse(status_code=int(result.status), content=message)


def envelope_response(result: ServiceResult) -> Response:
    """Render the whole envelope as the JSON body."""
    if result.status == HttpStatus.NO_CONTENT:
        return Response(status_code=int(HttpStatus.NO_CONTENT))
    return JSONResponse(status_code=int(result.status), content=result.to_body())
