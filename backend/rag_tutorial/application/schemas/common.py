"""Tagged success/failure envelope shared by every procedure endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ProcedureResult(BaseModel, Generic[T]):
    """``{success, data, error}``: exactly one of data/error is meaningful."""

    success: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: T) -> "ProcedureResult[T]":
        return cls(success=True, data=data, error=None)

    @classmethod
    def fail(cls, error: str) -> "ProcedureResult[T]":
        return cls(success=False, data=None, error=error)
