from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class FieldViolation(BaseModel):
    """A single offending input field, keyed by its wire name."""

    field: str = Field(description="Wire name of the field, e.g. 'soilPh'.")
    message: str = Field(description="Human readable reason the value was rejected.")


class FlowResult(BaseModel, Generic[T]):
    """Uniform envelope returned by every flow: either success or failure."""

    success: Optional[T] = None
    failure: Optional[str] = None
    errors: Optional[List[FieldViolation]] = None

    @classmethod
    def ok(cls, value: T) -> "FlowResult[T]":
        return cls(success=value)

    @classmethod
    def fail(
        cls, message: str, errors: Optional[List[FieldViolation]] = None
    ) -> "FlowResult[T]":
        return cls(failure=message, errors=errors)

    @property
    def is_success(self) -> bool:
        return self.success is not None
