from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from taskboard.errors import ValidationFailed
from taskboard.utils.timestamps import format_timestamp, parse_timestamp


class Status(str, Enum):
    BACKLOG = "backlog"
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    DONE = "done"


# Column order on the board; any status may follow any other
STATUS_LABELS = {
    Status.BACKLOG: "Backlog",
    Status.TODO: "To do",
    Status.IN_PROGRESS: "In progress",
    Status.BLOCKED: "Blocked",
    Status.DONE: "Done",
}


class Priority(str, Enum):
    LOW = "low"
    MED = "med"
    HIGH = "high"


class Assignee(str, Enum):
    UNASSIGNED = "unassigned"
    RAJIN = "rajin"
    ARIA = "aria"
    BOTH = "both"


DEFAULTS = {
    "title": "Untitled",
    "assignee": Assignee.UNASSIGNED.value,
    "status": Status.BACKLOG.value,
    "priority": Priority.MED.value,
}

MUTABLE_FIELDS = ("title", "description", "assignee", "status", "priority")


def _title_not_empty(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    if not v.strip():
        raise ValueError("title cannot be empty")
    return v.strip()


class TaskCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    title: str
    description: Optional[str] = None
    assignee: Optional[Assignee] = None
    status: Optional[Status] = None
    priority: Optional[Priority] = None

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v):
        return _title_not_empty(v)


class TaskPatch(BaseModel):
    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    title: Optional[str] = None
    description: Optional[str] = None
    assignee: Optional[Assignee] = None
    status: Optional[Status] = None
    priority: Optional[Priority] = None

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v):
        return _title_not_empty(v)

    def changes(self) -> dict[str, Any]:
        """Fields the caller actually provided; None counts as not provided."""
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}


class TaskRecord(BaseModel):
    """A task as persisted and returned to callers (camelCase on the wire)."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, use_enum_values=True)

    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: Optional[str] = None
    assignee: Assignee
    status: Status
    priority: Priority
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")

    @field_validator("created_at", "updated_at")
    @classmethod
    def well_formed_timestamp(cls, v):
        parse_timestamp(v)
        return v

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class BoardDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tasks: list[TaskRecord] = Field(default_factory=list)

    def to_document(self) -> dict[str, Any]:
        return {"tasks": [t.to_document() for t in self.tasks]}


class UnlockRequest(BaseModel):
    password: str = Field(min_length=1)


def validation_errors(exc: ValidationError) -> list[dict[str, Any]]:
    return [{"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]} for e in exc.errors()]


def validate_changes(changes: Any) -> dict[str, Any]:
    """Normalize a patch to the dict of provided fields, or raise ValidationFailed."""
    if isinstance(changes, TaskPatch):
        return changes.changes()
    try:
        return TaskPatch.model_validate(changes or {}).changes()
    except ValidationError as exc:
        raise ValidationFailed(errors=validation_errors(exc)) from exc


def validate_create(fields: Any) -> dict[str, Any]:
    """Validate creation fields and return the ones provided."""
    if not isinstance(fields, TaskCreate):
        try:
            fields = TaskCreate.model_validate(fields or {})
        except ValidationError as exc:
            raise ValidationFailed(errors=validation_errors(exc)) from exc
    return {k: v for k, v in fields.model_dump().items() if v is not None}


def _record(**fields) -> TaskRecord:
    try:
        return TaskRecord(**fields)
    except ValidationError as exc:
        raise ValidationFailed(errors=validation_errors(exc)) from exc


def build_task(task_id: str, changes: Mapping[str, Any], now: datetime) -> TaskRecord:
    """A new task: provided fields win, everything else takes its default."""
    ts = format_timestamp(now)
    fields = {name: changes.get(name) if changes.get(name) is not None else DEFAULTS.get(name)
              for name in MUTABLE_FIELDS}
    return _record(id=task_id, created_at=ts, updated_at=ts, **fields)


def merge_task(current: TaskRecord, changes: Mapping[str, Any], now: datetime) -> TaskRecord:
    """Merge provided fields over ``current``; createdAt never moves."""
    fields = {}
    for name in MUTABLE_FIELDS:
        value = changes.get(name)
        if value is None:
            value = getattr(current, name)
        if value is None:
            value = DEFAULTS.get(name)
        fields[name] = value
    return _record(
        id=current.id,
        created_at=current.created_at,
        updated_at=format_timestamp(now),
        **fields,
    )


def sort_for_display(tasks: list[TaskRecord]) -> list[TaskRecord]:
    return sorted(tasks, key=lambda t: parse_timestamp(t.updated_at), reverse=True)
