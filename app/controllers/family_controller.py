# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: families, their tasks and members.

Service errors propagate to the handlers registered in main.py, which map
them onto 400/404 responses.
"""
import uuid

from fastapi import APIRouter, Depends

from app.core.dependencies import get_family_service
from app.core.errors import ValidationError
from app.schemas import (
    CompleteTaskRequest, Family, FamilyCreate, FamilyUpdate, MemberCreate, TaskCreate,
)
from app.services.family_service import FamilyService

router = APIRouter(prefix="/api/families", tags=["Families"])


def _check_family_id(family_id: str) -> str:
    try:
        uuid.UUID(family_id)
    except ValueError:
        raise ValidationError("familyId", "Invalid family ID format")
    return family_id


@router.post("", status_code=201, response_model=Family)
def create_family(body: FamilyCreate,
                  service: FamilyService = Depends(get_family_service)):
    return service.create_family(
        name=body.name,
        members=[m.model_dump() for m in body.members],
    )


@router.get("/{family_id}", response_model=Family)
def get_family(family_id: str,
               service: FamilyService = Depends(get_family_service)):
    return service.get_family(_check_family_id(family_id))


@router.put("/{family_id}", response_model=Family)
def update_family(family_id: str, body: FamilyUpdate,
                  service: FamilyService = Depends(get_family_service)):
    return service.update_family(_check_family_id(family_id), body.model_dump(exclude_unset=True))


@router.post("/{family_id}/tasks/{task_id}/complete", response_model=Family)
def complete_task(family_id: str, task_id: str, body: CompleteTaskRequest,
                  service: FamilyService = Depends(get_family_service)):
    return service.complete_task(_check_family_id(family_id), task_id, body.completed_by)


@router.post("/{family_id}/tasks/{task_id}/reset", response_model=Family)
def reset_task(family_id: str, task_id: str,
               service: FamilyService = Depends(get_family_service)):
    return service.reset_task(_check_family_id(family_id), task_id)


@router.post("/{family_id}/tasks", response_model=Family)
def add_task(family_id: str, body: TaskCreate,
             service: FamilyService = Depends(get_family_service)):
    return service.add_task(_check_family_id(family_id), body.name, body.category)


@router.post("/{family_id}/members", response_model=Family)
def add_member(family_id: str, body: MemberCreate,
               service: FamilyService = Depends(get_family_service)):
    return service.add_member(_check_family_id(family_id), body.name, body.phone, body.notifications)


@router.post("/{family_id}/members/{member_id}/toggle-notifications", response_model=Family)
def toggle_member_notifications(family_id: str, member_id: str,
                                service: FamilyService = Depends(get_family_service)):
    return service.toggle_member_notifications(_check_family_id(family_id), member_id)
