# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — the Family aggregate with its embedded members and tasks.
Pure data structures, NO FastAPI dependency.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskCategory(str, Enum):
    HEALTH = "health"
    HYGIENE = "hygiene"
    ACTIVITY = "activity"
    OTHER = "other"


DEFAULT_TASKS = (
    ("Poop", TaskCategory.HYGIENE),
    ("Pee", TaskCategory.HYGIENE),
    ("Walk", TaskCategory.ACTIVITY),
    ("Feed", TaskCategory.HEALTH),
    ("Medicine", TaskCategory.HEALTH),
    ("Bath", TaskCategory.HYGIENE),
)


class _Document(BaseModel):
    """camelCase on the wire and in the store, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Member(_Document):
    id: str = Field(default_factory=new_id)
    name: str
    phone: str
    notifications: bool = True


class Task(_Document):
    id: str = Field(default_factory=new_id)
    name: str
    category: TaskCategory = TaskCategory.OTHER
    completed_by: Optional[str] = None
    completed_at: Optional[datetime] = None
    is_completed: bool = False

    def complete(self, completed_by: str, when: Optional[datetime] = None) -> None:
        self.completed_by = completed_by
        self.completed_at = when or utcnow()
        self.is_completed = True

    def reset(self) -> None:
        self.completed_by = None
        self.completed_at = None
        self.is_completed = False


class Family(_Document):
    id: str = Field(default_factory=new_id)
    name: str
    members: List[Member] = Field(default_factory=list)
    tasks: List[Task] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)

    def find_task(self, task_id: str) -> Optional[Task]:
        return next((t for t in self.tasks if t.id == task_id), None)

    def find_member(self, member_id: str) -> Optional[Member]:
        return next((m for m in self.members if m.id == member_id), None)

    def notification_recipients(self, completed_by: str) -> List[Member]:
        """Members who get an SMS when ``completed_by`` finishes a task."""
        return [m for m in self.members if m.notifications and m.name != completed_by]
