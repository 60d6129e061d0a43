# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Pydantic request/response schemas."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.domain import Family, Member, Task

# Business rules (required names, known categories) are checked by
# FamilyService so they surface as 400s with a readable message.


class _Request(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MemberIn(_Request):
    id: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    notifications: bool = True


class TaskIn(_Request):
    id: Optional[str] = None
    name: Optional[str] = None
    category: Optional[str] = None
    completed_by: Optional[str] = None
    completed_at: Optional[datetime] = None
    is_completed: bool = False


class FamilyCreate(_Request):
    name: Optional[str] = Field(default=None, max_length=255)
    members: List[MemberIn] = Field(default_factory=list)


class FamilyUpdate(_Request):
    name: Optional[str] = Field(default=None, max_length=255)
    members: Optional[List[MemberIn]] = None
    tasks: Optional[List[TaskIn]] = None


class TaskCreate(_Request):
    name: Optional[str] = Field(default=None, max_length=255)
    category: Optional[str] = None


class MemberCreate(_Request):
    name: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)
    notifications: bool = True


class CompleteTaskRequest(_Request):
    completed_by: Optional[str] = Field(default=None, max_length=255)


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
    request_id: Optional[str] = None


__all__ = [
    "MemberIn", "TaskIn", "FamilyCreate", "FamilyUpdate",
    "TaskCreate", "MemberCreate", "CompleteTaskRequest", "HealthResponse",
    "ErrorResponse", "Family", "Member", "Task",
]
