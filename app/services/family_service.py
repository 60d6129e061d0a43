# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Business logic for families, their members and pet-care tasks."""
from typing import Any, Dict, Iterable, List, Optional

from app.core.errors import NotFoundError, NotificationError, ValidationError
from app.core.logging import family_context, get_logger
from app.metrics import FAMILIES_CREATED, TASKS_COMPLETED, TASKS_RESET
from app.models.domain import DEFAULT_TASKS, Family, Member, Task, TaskCategory, new_id, utcnow
from app.repositories.family_repository import FamilyRepository

logger = get_logger(__name__)


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def parse_category(value: Optional[str]) -> TaskCategory:
    """Omitted category means ``other``; anything outside the enum is rejected."""
    raw = _clean(value).lower()
    if not raw:
        return TaskCategory.OTHER
    try:
        return TaskCategory(raw)
    except ValueError:
        allowed = ", ".join(c.value for c in TaskCategory)
        raise ValidationError("category", f"'{value}' is not one of: {allowed}")


class FamilyService:
    def __init__(self, repo: FamilyRepository, sms_client):
        self._repo = repo
        self._sms = sms_client

    # ── Builders ───────────────────────────────────────────────────────

    def _build_member(self, data: Dict[str, Any]) -> Member:
        name = _clean(data.get("name"))
        phone = _clean(data.get("phone"))
        if not name:
            raise ValidationError("members.name", "member name is required")
        if not phone:
            raise ValidationError("members.phone", f"phone number is required for {name}")
        notifications = data.get("notifications")
        return Member(
            id=data.get("id") or new_id(),
            name=name,
            phone=phone,
            notifications=True if notifications is None else bool(notifications),
        )

    def _build_task(self, data: Dict[str, Any]) -> Task:
        name = _clean(data.get("name"))
        if not name:
            raise ValidationError("tasks.name", "task name is required")
        task = Task(id=data.get("id") or new_id(), name=name,
                    category=parse_category(data.get("category")))
        completed_by = _clean(data.get("completed_by"))
        if data.get("is_completed"):
            if not completed_by:
                raise ValidationError("tasks.completedBy", f"completed task '{name}' needs completedBy")
            task.complete(completed_by, data.get("completed_at"))
        return task

    def _build_members(self, members: Optional[Iterable[Dict[str, Any]]]) -> List[Member]:
        built = [self._build_member(m) for m in members or []]
        ids = [m.id for m in built]
        if len(ids) != len(set(ids)):
            raise ValidationError("members.id", "member ids must be unique")
        return built

    def _build_tasks(self, tasks: Iterable[Dict[str, Any]]) -> List[Task]:
        built = [self._build_task(t) for t in tasks]
        ids = [t.id for t in built]
        if len(ids) != len(set(ids)):
            raise ValidationError("tasks.id", "task ids must be unique")
        return built

    # ── Lookups ────────────────────────────────────────────────────────

    def get_family(self, family_id: str) -> Family:
        family = self._repo.get(family_id)
        if family is None:
            raise NotFoundError("Family", family_id)
        return family

    def _get_task(self, family: Family, task_id: str) -> Task:
        task = family.find_task(task_id)
        if task is None:
            raise NotFoundError("Task", task_id)
        return task

    def _get_member(self, family: Family, member_id: str) -> Member:
        member = family.find_member(member_id)
        if member is None:
            raise NotFoundError("Member", member_id)
        return member

    def _save(self, family: Family) -> Family:
        if not self._repo.save(family):
            raise NotFoundError("Family", family.id)
        return family

    # ── Mutations ──────────────────────────────────────────────────────

    def create_family(self, name: Optional[str], members: Optional[Iterable[Dict[str, Any]]] = None) -> Family:
        name = _clean(name)
        if not name:
            raise ValidationError("name", "family name is required")
        family = Family(
            name=name,
            members=self._build_members(members),
            tasks=[Task(name=task_name, category=category) for task_name, category in DEFAULT_TASKS],
        )
        self._repo.insert(family)
        FAMILIES_CREATED.inc()
        logger.info("Family created name=%s members=%d", family.name, len(family.members),
                    extra=family_context(family.id))
        return family

    def update_family(self, family_id: str, patch: Dict[str, Any]) -> Family:
        """Replace the top-level fields present in ``patch``; the rest stay as they are."""
        family = self.get_family(family_id)
        if "name" in patch:
            name = _clean(patch["name"])
            if not name:
                raise ValidationError("name", "family name is required")
            family.name = name
        if patch.get("members") is not None:
            family.members = self._build_members(patch["members"])
        if patch.get("tasks") is not None:
            family.tasks = self._build_tasks(patch["tasks"])
        self._save(family)
        logger.info("Family updated fields=%s", sorted(patch), extra=family_context(family_id))
        return family

    def complete_task(self, family_id: str, task_id: str, completed_by: Optional[str]) -> Family:
        family = self.get_family(family_id)
        task = self._get_task(family, task_id)
        completed_by = _clean(completed_by)
        if not completed_by:
            raise ValidationError("completedBy", "completedBy is required")

        task.complete(completed_by, utcnow())
        self._save(family)
        TASKS_COMPLETED.labels(category=task.category.value).inc()
        logger.info("Task %s completed by %s", task.name, completed_by,
                    extra=family_context(family_id, task_id=task.id))

        # The completion is already stored; SMS failures only get logged.
        self.send_task_notifications(family, task, completed_by)
        return family

    def reset_task(self, family_id: str, task_id: str) -> Family:
        family = self.get_family(family_id)
        task = self._get_task(family, task_id)
        task.reset()
        self._save(family)
        TASKS_RESET.labels(category=task.category.value).inc()
        logger.info("Task %s reset", task.name, extra=family_context(family_id, task_id=task.id))
        return family

    def add_task(self, family_id: str, name: Optional[str], category: Optional[str] = None) -> Family:
        family = self.get_family(family_id)
        task = self._build_task({"name": name, "category": category})
        family.tasks.append(task)
        self._save(family)
        logger.info("Task %s added category=%s", task.name, task.category.value,
                    extra=family_context(family_id, task_id=task.id))
        return family

    def add_member(self, family_id: str, name: Optional[str], phone: Optional[str],
                   notifications: bool = True) -> Family:
        family = self.get_family(family_id)
        member = self._build_member({"name": name, "phone": phone, "notifications": notifications})
        family.members.append(member)
        self._save(family)
        logger.info("Member %s added", member.name, extra=family_context(family_id, member_id=member.id))
        return family

    def toggle_member_notifications(self, family_id: str, member_id: str) -> Family:
        family = self.get_family(family_id)
        member = self._get_member(family, member_id)
        member.notifications = not member.notifications
        self._save(family)
        logger.info("Notifications %s for %s", "enabled" if member.notifications else "disabled",
                    member.name, extra=family_context(family_id, member_id=member.id))
        return family

    # ── Notification fan-out ───────────────────────────────────────────

    def send_task_notifications(self, family: Family, task: Task, completed_by: str) -> List[str]:
        """Text every opted-in member except the completer.

        Each recipient is tried on its own; a failed send is logged and the
        loop moves on. Returns the phone numbers that were delivered to.
        """
        message = f"{completed_by} completed task: {task.name} for {family.name}"
        delivered: List[str] = []
        for member in family.notification_recipients(completed_by):
            try:
                self._sms.send(to=member.phone, body=message)
                delivered.append(member.phone)
            except NotificationError as exc:
                logger.error(
                    "Failed to send SMS to %s: %s", member.phone, exc.reason,
                    extra=family_context(family.id, task_id=task.id, member_id=member.id,
                                         recipient=member.phone),
                )
        return delivered
