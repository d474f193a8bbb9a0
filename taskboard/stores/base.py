"""Port interface for task persistence (backend boundary)."""

from typing import Any, Mapping, Protocol, runtime_checkable

from taskboard.schemas.task import TaskRecord


@runtime_checkable
class TaskStore(Protocol):
    """Uniform read/upsert/delete capability implemented by every backend."""

    mode: str

    def read_all(self) -> list[TaskRecord]:
        """Return every stored task."""

    def upsert(self, task_id: str, changes: Mapping[str, Any]) -> TaskRecord:
        """Create the task if ``task_id`` is unseen, else merge ``changes`` into it."""

    def delete(self, task_id: str) -> None:
        """Remove the task; unknown ids are a no-op."""
