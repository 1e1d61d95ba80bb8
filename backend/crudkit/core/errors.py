"""Error Taxonomy: closed hierarchy of domain failures with stable codes.

Invariants:
    - Every failure has a code (str), a level (System | Business) and a kind tag
    - kind is the only thing the failure-to-envelope conversion looks at
      (core/result_mapping.py); adding a FailureKind means adding a mapping row
    - The wrapped store fault (cause) is kept for logs, never rendered to clients

Design Decisions:
    - Exceptions rather than returned values: failures cross the service and
      controller layers untouched and are converted once, at the error boundary
    - FailureKind enum as the tag: the mapping table is checked for totality in tests
"""

from enum import Enum


COMMON_ERROR_MESSAGE = "An error occurred while processing your request"


class ErrorLevel(str, Enum):
    """Severity class of a domain failure."""
    SYSTEM = "System"
    BUSINESS = "Business"


class ErrorCode(str, Enum):
    """Stable machine-readable codes shared with clients and logs."""
    DATABASE = "DatabaseError"
    OPERATIONAL = "OperationalError"
    UNAUTHORIZED = "UnauthorizedError"
    FORBIDDEN = "ForbiddenError"
    NOT_FOUND = "NotFoundError"
    NULL = "NullError"
    ALREADY_EXISTS = "AlreadyExistsError"
    VALIDATION = "ValidationError"
    SYSTEM_INTERNAL = "SystemInternalServerError"
    BUSINESS_INTERNAL = "BusinessInternalServerError"


class FailureKind(str, Enum):
    """Tag identifying which taxonomy leaf a failure belongs to."""
    DATABASE = "database"
    OPERATIONAL = "operational"
    UNAUTHORIZED = "unauthorized"
    SYSTEM = "system"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    NULL = "null"
    ALREADY_EXISTS = "already_exists"
    BUSINESS = "business"


_LEVEL_KINDS = {
    ErrorLevel.SYSTEM: FailureKind.SYSTEM,
    ErrorLevel.BUSINESS: FailureKind.BUSINESS,
}


class DomainError(Exception):
    """Base exception for all domain failures.

    Raised directly, it is a generic failure of its level: the kind follows
    `level`, so a Business DomainError maps like BusinessError.
    """

    kind: FailureKind | None = None

    def __init__(
        self,
        code: str,
        level: ErrorLevel,
        message: str | None = None,
        cause: BaseException | None = None,
    ):
        code = code.value if isinstance(code, ErrorCode) else code
        super().__init__(message or code)
        self.code = code
        self.level = ErrorLevel(level)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause
        if self.kind is None:
            self.kind = _LEVEL_KINDS[self.level]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, level={self.level.value!r})"


# ─── System-level failures ──────────────────────────────────────

class SystemLevelError(DomainError):
    """Unclassified system failure; carries its own code."""

    kind = FailureKind.SYSTEM

    def __init__(
        self,
        code: str = ErrorCode.SYSTEM_INTERNAL,
        message: str | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(code, ErrorLevel.SYSTEM, message, cause)


class DatabaseError(SystemLevelError):
    """Store read or write failed. The original fault is the cause."""

    kind = FailureKind.DATABASE

    def __init__(self, cause: BaseException | None = None, message: str | None = None):
        super().__init__(ErrorCode.DATABASE, message, cause)


class OperationalError(SystemLevelError):
    kind = FailureKind.OPERATIONAL

    def __init__(
        self,
        code: str = ErrorCode.OPERATIONAL,
        message: str | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(code, message, cause)


class UnauthorizedError(SystemLevelError):
    kind = FailureKind.UNAUTHORIZED

    def __init__(self, message: str | None = None, cause: BaseException | None = None):
        super().__init__(ErrorCode.UNAUTHORIZED, message, cause)


# ─── Business-level failures ────────────────────────────────────

class BusinessError(DomainError):
    """Generic business rule violation; carries its own code."""

    kind = FailureKind.BUSINESS

    def __init__(
        self,
        code: str = ErrorCode.BUSINESS_INTERNAL,
        message: str | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(code, ErrorLevel.BUSINESS, message, cause)


class ForbiddenError(BusinessError):
    kind = FailureKind.FORBIDDEN

    def __init__(self, message: str | None = None, cause: BaseException | None = None):
        super().__init__(ErrorCode.FORBIDDEN, message, cause)


class NotFoundError(BusinessError):
    kind = FailureKind.NOT_FOUND

    def __init__(self, message: str | None = None, cause: BaseException | None = None):
        super().__init__(ErrorCode.NOT_FOUND, message, cause)


class NullError(BusinessError):
    """A required value was absent."""

    kind = FailureKind.NULL

    def __init__(self, message: str | None = None, cause: BaseException | None = None):
        super().__init__(ErrorCode.NULL, message, cause)


class AlreadyExistsError(BusinessError):
    kind = FailureKind.ALREADY_EXISTS

    def __init__(self, message: str | None = None, cause: BaseException | None = None):
        super().__init__(ErrorCode.ALREADY_EXISTS, message, cause)
