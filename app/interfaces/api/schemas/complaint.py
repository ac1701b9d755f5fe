"""Pydantic models describing complaint payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Category = Literal[
    "technical", "environment", "hr", "equipment", "safety", "financial", "others"
]
Priority = Literal["low", "medium", "high", "urgent"]
Status = Literal["new", "received", "discussing", "processing", "resolved", "archived"]


class ComplaintCreate(BaseModel):
    """Anonymous complaint submission."""

    category: Category
    priority: Priority
    subject: str = Field(..., min_length=3, max_length=255)
    description: str = Field(..., min_length=10)


class ComplaintSubmitted(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    tracking_number: str
    id: int


class ComplaintTrackingRead(BaseModel):
    """Public view of a complaint returned by the tracking lookup."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    tracking_number: str
    category: str
    priority: str
    status: str
    subject: str
    created_at: datetime | None = None


class ComplaintStatusUpdate(BaseModel):
    status: Status


class ComplaintRead(ComplaintTrackingRead):
    id: int
    description: str
    updated_at: datetime | None = None


__all__ = [
    "ComplaintCreate",
    "ComplaintRead",
    "ComplaintStatusUpdate",
    "ComplaintSubmitted",
    "ComplaintTrackingRead",
]
