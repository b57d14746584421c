"""Uniform result envelope passed between the vendor client, services and routers."""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResult(BaseModel, Generic[T]):
    """Outcome of a vendor-facing operation: `{ success, data, error, status_code }`.

    Failures never travel as exceptions between layers; they are carried here
    with the status code the caller should surface.
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    status_code: int = 200

    @classmethod
    def ok(cls, data: T) -> "ApiResult[T]":
        return cls(success=True, data=data, status_code=200)

    @classmethod
    def fail(cls, error: str, status_code: int = 400) -> "ApiResult[T]":
        return cls(success=False, error=error, status_code=status_code)
