"""
Response envelopes shared by every endpoint.

Success bodies are `{success: true, message, data}`. Failures are
`{success: false, message, error_code, errors}` and are rendered by the
exception handlers only.
"""

from typing import Generic, List, Optional, TypeVar

from app.schemas.common.base import BaseSchema

T = TypeVar("T")

__all__ = [
    "SuccessResponse",
    "ErrorDetail",
    "ErrorResponse",
]


class SuccessResponse(BaseSchema, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None

    @classmethod
    def create(cls, data: Optional[T] = None, message: Optional[str] = None):
        return cls(data=data, message=message)


class ErrorDetail(BaseSchema):
    """One offending field, or a general message when `field` is None."""

    field: Optional[str] = None
    message: str


class ErrorResponse(BaseSchema):
    """
    Holds nothing request-specific, so two identical failures produce
    byte-identical bodies. Login relies on this.
    """

    success: bool = False
    message: str
    error_code: Optional[str] = None
    errors: Optional[List[ErrorDetail]] = None

    @classmethod
    def create(
        cls,
        message: str,
        error_code: Optional[str] = None,
        errors: Optional[List[ErrorDetail]] = None,
    ):
        return cls(message=message, error_code=error_code, errors=errors)
