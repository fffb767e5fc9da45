from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every successful response body."""

    success: bool = True
    status: str
    message: str
    data: T | None = None


class ErrorResponse(BaseModel):
    success: bool = False
    status: str
    message: str
    error: str | None = None
