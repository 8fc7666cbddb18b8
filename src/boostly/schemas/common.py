"""Shared response envelope and base model."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON while keeping snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope wrapped around every successful response."""

    success: bool = True
    message: str = "Success"
    data: Optional[DataT] = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: Optional[list[str]] = None


class StudentRef(CamelModel):
    """Lightweight projection of student details."""

    student_id: str
    name: str
