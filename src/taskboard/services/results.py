"""Explicit success/failure values returned by the service layer.

Services never raise for expected outcomes such as a missing project or a
foreign owner. They return a :class:`ServiceResult`, and the HTTP boundary
turns a failure into the matching :class:`~taskboard.errors.ApplicationError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from ..errors import (
    ApplicationError,
    ConflictError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailedError,
)

T = TypeVar("T")
U = TypeVar("U")


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


_EXCEPTION_BY_KIND: dict[ErrorKind, type[ApplicationError]] = {
    ErrorKind.VALIDATION: ValidationFailedError,
    ErrorKind.UNAUTHORIZED: UnauthorizedError,
    ErrorKind.FORBIDDEN: ForbiddenError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.CONFLICT: ConflictError,
    ErrorKind.INTERNAL: InternalError,
}


@dataclass(frozen=True, slots=True)
class ServiceError:
    """A typed, user-safe failure."""

    kind: ErrorKind
    message: str

    @classmethod
    def validation(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def unauthorized(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.UNAUTHORIZED, message)

    @classmethod
    def forbidden(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.FORBIDDEN, message)

    @classmethod
    def not_found(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def conflict(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.CONFLICT, message)

    def to_exception(self) -> ApplicationError:
        """Return the HTTP-facing exception for this failure."""

        return _EXCEPTION_BY_KIND[self.kind](self.message)


class ServiceResultError(RuntimeError):
    """Raised when reading the value of a failed result or the error of a successful one."""


@dataclass(frozen=True, slots=True)
class ServiceResult(Generic[T]):
    """Either a value or a :class:`ServiceError`, never both."""

    value: T | None = None
    error: ServiceError | None = None

    @classmethod
    def ok(cls, value: T) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ServiceError) -> "ServiceResult[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise the failure as an ``ApplicationError``."""

        if self.error is not None:
            raise self.error.to_exception()
        return self.value  # type: ignore[return-value]

    def unwrap_error(self) -> ServiceError:
        if self.error is None:
            raise ServiceResultError("result holds a value, not an error")
        return self.error

    def cast(self) -> "ServiceResult[U]":
        """Re-type a failure so it can be returned from a function of another result type."""

        if self.error is None:
            raise ServiceResultError("only failures can be re-typed")
        return ServiceResult(error=self.error)


__all__ = ["ErrorKind", "ServiceError", "ServiceResult", "ServiceResultError"]
