import uuid
from functools import lru_cache
from typing import Any, Mapping, Union

from taskboard.errors import ValidationFailed
from taskboard.schemas.task import TaskCreate, TaskPatch, TaskRecord, validate_changes, validate_create
from taskboard.stores.base import TaskStore
from taskboard.stores.selector import active_backend


def new_task_id() -> str:
    return f"t_{uuid.uuid4()}"


class BoardService:
    """Read-all / upsert / delete over whichever backend is active.

    Holds no backend-specific logic: every call goes straight to ``store``.
    """

    def __init__(self, store: TaskStore):
        self._store = store

    def read_board(self) -> list[TaskRecord]:
        return self._store.read_all()

    def upsert_task(self, task_id: str, changes: Union[TaskPatch, Mapping[str, Any], None]) -> TaskRecord:
        if not task_id:
            raise ValidationFailed("task id is required")
        return self._store.upsert(task_id, validate_changes(changes))

    def create_task(self, fields: Union[TaskCreate, Mapping[str, Any]]) -> TaskRecord:
        return self._store.upsert(new_task_id(), validate_create(fields))

    def delete_task(self, task_id: str) -> None:
        self._store.delete(task_id)

    def storage_mode(self) -> str:
        return self._store.mode


@lru_cache(maxsize=None)
def get_board_service() -> BoardService:
    """FastAPI dependency: the process-wide service over the active backend."""
    return BoardService(active_backend())
