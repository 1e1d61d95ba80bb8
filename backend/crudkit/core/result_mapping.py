"""Failure Mapping: raised failure → failure envelope (single source of truth).

Invariants:
    - Every FailureKind has exactly one row in FAILURE_ENVELOPES
    - Anything that is not a DomainError becomes the global system error
    - Pure: no logging, no environment lookups (see api/error_handlers.py)
"""

from typing import Callable

from crudkit.core.errors import DomainError, FailureKind
from crudkit.core.results import ErrorModel, ServiceResult


def _own_code(exc: DomainError) -> ErrorModel:
    return ErrorModel(code=exc.code)


FAILURE_ENVELOPES: dict[FailureKind, Callable[[DomainError], ServiceResult]] = {
    FailureKind.DATABASE: lambda exc: ServiceResult.system_error(_own_code(exc)),
    FailureKind.OPERATIONAL: lambda exc: ServiceResult.system_error(_own_code(exc)),
    FailureKind.SYSTEM: lambda exc: ServiceResult.system_error(_own_code(exc)),
    FailureKind.UNAUTHORIZED: lambda exc: ServiceResult.unauthorized(),
    FailureKind.FORBIDDEN: lambda exc: ServiceResult.forbidden(),
    FailureKind.NOT_FOUND: lambda exc: ServiceResult.not_found(),
    FailureKind.ALREADY_EXISTS: lambda exc: ServiceResult.already_exists(),
    FailureKind.NULL: lambda exc: ServiceResult.business_error(_own_code(exc)),
    FailureKind.BUSINESS: lambda exc: ServiceResult.business_error(_own_code(exc)),
}


def from_exception(exc: BaseException) -> ServiceResult:
    """Convert a raised failure into the matching failure envelope."""
    if not isinstance(exc, DomainError):
        return ServiceResult.global_system_error()
    return FAILURE_ENVELOPES[exc.kind](exc)
