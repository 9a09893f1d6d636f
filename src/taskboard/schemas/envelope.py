"""Success and failure envelopes wrapping every API payload."""

from __future__ import annotations

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope returned by successful requests."""

    success: Literal[True] = True
    data: T


class FieldError(BaseModel):
    """A single field-level validation problem."""

    field: str = Field(description="Dotted path of the offending input field")
    message: str


class ErrorResponse(BaseModel):
    """Standardised error envelope returned by exception handlers."""

    success: Literal[False] = False
    error: str = Field(description="Human-readable error message")
    details: list[FieldError] | None = Field(
        default=None,
        description="Per-field problems, present for validation failures.",
    )


def envelope(data: T) -> ApiResponse[T]:
    """Wrap ``data`` in the success envelope."""

    return ApiResponse(data=data)


__all__ = ["ApiResponse", "ErrorResponse", "FieldError", "envelope"]
