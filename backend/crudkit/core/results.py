"""Result Envelope: discriminated success/failure outcome of every operation.

Invariants:
    - Exactly one of result / error_result is set; is_success is derived from it
    - A success never carries an ErrorModel, a failure never carries a payload
    - Envelopes are frozen; with_detail() returns a new envelope
    - Serialized shape only contains the active variant:
        success → {"isSuccess": true,  "result": {"status", "data"?}}
        failure → {"isSuccess": false, "errorResult": {"status", "data": {"traceId", "code", "message"?, "detail"?}}}

Design Decisions:
    - Pydantic generic model: ServiceResult[ProductView] validates the payload type
      and serializes view models without custom encoders
    - Named classmethod constructors are the public way to build an envelope
"""

from enum import IntEnum
from typing import Any, Generic, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator
from pydantic.alias_generators import to_camel

from crudkit.core.errors import COMMON_ERROR_MESSAGE, ErrorCode

T = TypeVar("T")


class HttpStatus(IntEnum):
    """Status classes an envelope can carry."""
    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NO_CONTENT = 204
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    INTERNAL = 500


SUCCESS_STATUSES = frozenset({
    HttpStatus.OK, HttpStatus.CREATED, HttpStatus.ACCEPTED, HttpStatus.NO_CONTENT,
})

_ENVELOPE_CONFIG = ConfigDict(
    frozen=True, alias_generator=to_camel, populate_by_name=True,
)


class ErrorModel(BaseModel):
    """Client-facing error data. trace_id is fresh per instance."""
    model_config = _ENVELOPE_CONFIG

    trace_id: str = Field(default_factory=lambda: uuid4().hex)
    code: str
    message: str | None = None
    detail: str | None = None


class Result(BaseModel, Generic[T]):
    model_config = _ENVELOPE_CONFIG

    status: HttpStatus
    data: T | None = None

    @model_validator(mode="after")
    def _status_is_success_class(self):
        if self.status not in SUCCESS_STATUSES:
            raise ValueError(f"{self.status!r} is not a success status")
        return self


class ErrorResult(BaseModel):
    model_config = _ENVELOPE_CONFIG

    status: HttpStatus
    data: ErrorModel

    @model_validator(mode="after")
    def _status_is_failure_class(self):
        if self.status in SUCCESS_STATUSES:
            raise ValueError(f"{self.status!r} is not a failure status")
        return self


class ServiceResult(BaseModel, Generic[T]):
    """Success-or-failure envelope, optionally typed over its payload."""
    model_config = _ENVELOPE_CONFIG

    result: Result[T] | None = None
    error_result: ErrorResult | None = None

    @model_validator(mode="after")
    def _exactly_one_variant(self):
        if (self.result is None) == (self.error_result is None):
            raise ValueError("exactly one of result / error_result must be set")
        return self

    @computed_field(alias="isSuccess")
    @property
    def is_success(self) -> bool:
        return self.result is not None

    # ─── Success constructors ───────────────────────────────────

    @classmethod
    def ok(cls, data: T | None = None) -> "ServiceResult[T]":
        return cls._success(HttpStatus.OK, data)

    @classmethod
    def created(cls, data: T | None = None) -> "ServiceResult[T]":
        return cls._success(HttpStatus.CREATED, data)

    @classmethod
    def accepted(cls, data: T | None = None) -> "ServiceResult[T]":
        return cls._success(HttpStatus.ACCEPTED, data)

    @classmethod
    def no_content(cls, data: T | None = None) -> "ServiceResult[T]":
        return cls._success(HttpStatus.NO_CONTENT, data)

    # ─── Failure constructors ───────────────────────────────────

    @classmethod
    def system_error(cls, data: ErrorModel) -> "ServiceResult[T]":
        return cls._failure(HttpStatus.INTERNAL, data)

    @classmethod
    def global_system_error(cls) -> "ServiceResult[T]":
        return cls.system_error(ErrorModel(
            code=ErrorCode.SYSTEM_INTERNAL.value, message=COMMON_ERROR_MESSAGE,
        ))

    @classmethod
    def unauthorized(cls) -> "ServiceResult[T]":
        return cls._failure(
            HttpStatus.UNAUTHORIZED, ErrorModel(code=ErrorCode.UNAUTHORIZED.value),
        )

    @classmethod
    def business_error(cls, data: ErrorModel) -> "ServiceResult[T]":
        return cls._failure(HttpStatus.BAD_REQUEST, data)

    @classmethod
    def global_business_error(cls) -> "ServiceResult[T]":
        return cls.business_error(ErrorModel(
            code=ErrorCode.BUSINESS_INTERNAL.value, message=COMMON_ERROR_MESSAGE,
        ))

    @classmethod
    def not_found(cls) -> "ServiceResult[T]":
        return cls._failure(
            HttpStatus.NOT_FOUND, ErrorModel(code=ErrorCode.NOT_FOUND.value),
        )

    @classmethod
    def already_exists(cls) -> "ServiceResult[T]":
        return cls._failure(
            HttpStatus.BAD_REQUEST, ErrorModel(code=ErrorCode.ALREADY_EXISTS.value),
        )

    @classmethod
    def forbidden(cls) -> "ServiceResult[T]":
        return cls._failure(
            HttpStatus.FORBIDDEN, ErrorModel(code=ErrorCode.FORBIDDEN.value),
        )

    # ─── Helpers ────────────────────────────────────────────────

    @classmethod
    def _success(cls, status: HttpStatus, data: Any) -> "ServiceResult[T]":
        return cls(result={"status": status, "data": data})

    @classmethod
    def _failure(cls, status: HttpStatus, data: ErrorModel) -> "ServiceResult[T]":
        return cls(error_result=ErrorResult(status=status, data=data))

    @property
    def status(self) -> HttpStatus:
        """Status of whichever variant is active."""
        if self.result is not None:
            return self.result.status
        return self.error_result.status

    def with_detail(self, detail: str | None) -> "ServiceResult[T]":
        """Copy of a failure envelope with ErrorModel.detail replaced."""
        if self.error_result is None:
            raise ValueError("only failure envelopes carry error detail")
        data = self.error_result.data.model_copy(update={"detail": detail})
        error_result = self.error_result.model_copy(update={"data": data})
        return self.model_copy(update={"error_result": error_result})

    def to_body(self) -> dict:
        """JSON-ready body containing only the active variant's fields."""
        body = self.model_dump(mode="json", by_alias=True)
        if self.is_success:
            del body["errorResult"]
            if body["result"]["data"] is None:
                del body["result"]["data"]
            return body
        del body["result"]
        error_data = body["errorResult"]["data"]
        for key in ("message", "detail"):
            if error_data[key] is None:
                del error_data[key]
        return body
