"""Error Handlers: the single unhandled-failure boundary.

Invariants:
    - Every DomainError or unexpected exception escaping a route is converted here,
      through core/result_mapping.from_exception, and nowhere else
    - Each conversion, request validation included, logs once at ERROR with the
      common message and the trace id
    - ErrorModel.detail carries the full failure description only outside
      sensitive environments (Production / Staging / Demo)
    - RequestValidationError → Bad Request envelope with code ValidationError

Design Decisions:
    - Sensitivity is a constructor argument of ErrorBoundary, read from Settings once
      in main.py
    - Framework HTTPExceptions (404 route, 405 method) keep FastAPI's default rendering
"""

import logging
import traceback

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError

from crudkit.core.errors import COMMON_ERROR_MESSAGE, DomainError, ErrorCode
from crudkit.core.result_mapping import from_exception
from crudkit.core.results import ErrorModel, ServiceResult
from crudkit.api.responses import envelope_response

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request data"


def describe_failure(exc: BaseException) -> str:
    """Full failure description: type, message, traceback and chained causes."""
    return "".join(
        traceback.format_exception(type(exc), exc, exc.__traceback__),
    ).rstrip()


class ErrorBoundary:
    """Converts escaped failures into envelopes and logs them."""

    def __init__(self, sensitive_environment: bool):
        self.sensitive_environment = sensitive_environment

    def convert(self, exc: BaseException, path: str | None = None) -> ServiceResult:
        result = from_exception(exc)
        error = result.error_result.data
        logger.error(
            f"{COMMON_ERROR_MESSAGE}. TraceId: {error.trace_id}",
            exc_info=(type(exc), exc, exc.__traceback__),
            extra={
                "trace_id": error.trace_id,
                "error_code": error.code,
                "path": path,
            },
        )
        if not self.sensitive_environment:
            result = result.with_detail(describe_failure(exc))
        return result

    def convert_validation(
        self, exc: RequestValidationError, path: str | None = None,
    ) -> ServiceResult:
        error = ErrorModel(
            code=ErrorCode.VALIDATION.value, message=INVALID_REQUEST_MESSAGE,
        )
        logger.error(
            f"{COMMON_ERROR_MESSAGE}. TraceId: {error.trace_id}",
            extra={
                "trace_id": error.trace_id,
                "error_code": error.code,
                "path": path,
            },
        )
        logger.debug(f"Rejected request data on {path}: {exc.errors()}")
        result = ServiceResult.business_error(error)
        if not self.sensitive_environment:
            result = result.with_detail(_format_validation_errors(exc))
        return result

    async def handle(self, request: Request, exc: Exception) -> Response:
        return envelope_response(self.convert(exc, request.url.path))

    async def handle_validation(
        self, request: Request, exc: RequestValidationError,
    ) -> Response:
        return envelope_response(self.convert_validation(exc, request.url.path))

    def register(self, app: FastAPI) -> None:
        """Install this boundary as the app's global exception handlers."""
        app.add_exception_handler(RequestValidationError, self.handle_validation)
        app.add_exception_handler(DomainError, self.handle)
        app.add_exception_handler(Exception, self.handle)


def _format_validation_errors(exc: RequestValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    )
