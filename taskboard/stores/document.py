"""Whole-board JSON document on local disk."""

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Mapping

from taskboard.schemas.task import BoardDocument, TaskRecord, build_task, merge_task
from taskboard.utils.timestamps import utcnow

logger = logging.getLogger(__name__)


def _atomic_write(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    data = (json.dumps(payload, ensure_ascii=False, indent=2) + "\n").encode("utf-8")
    with open(tmp_path, "wb") as handle:
        handle.write(data)
        handle.flush()
        os.fsync(handle.fileno())
    os.replace(tmp_path, path)


class DocumentStore:
    """Every mutation re-reads, re-validates and rewrites the full document.

    Single-process only: there is no file lock, so concurrent writers race
    and the last complete write wins.
    """

    mode = "json"

    def __init__(self, path, clock: Callable[[], datetime] = utcnow):
        self.path = Path(path)
        self._clock = clock

    def _ensure_file(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            _atomic_write(self.path, BoardDocument().to_document())
            logger.info("seeded empty board at %s", self.path, extra={"backend": self.mode})

    def _read_document(self) -> BoardDocument:
        self._ensure_file()
        with open(self.path, "r", encoding="utf-8") as f:
            return BoardDocument.model_validate(json.load(f))

    def _write_document(self, board: BoardDocument) -> None:
        _atomic_write(self.path, board.to_document())

    def read_board(self) -> BoardDocument:
        return self._read_document()

    def write_board(self, board: BoardDocument) -> None:
        """Replace the whole board; the input is validated before anything is written."""
        self._ensure_file()
        self._write_document(BoardDocument.model_validate(board.to_document()))

    def read_all(self) -> list[TaskRecord]:
        return list(self._read_document().tasks)

    def upsert(self, task_id: str, changes: Mapping[str, Any]) -> TaskRecord:
        board = self._read_document()
        now = self._clock()

        idx = next((i for i, t in enumerate(board.tasks) if t.id == task_id), None)
        if idx is None:
            record = build_task(task_id, changes, now)
            board.tasks.insert(0, record)
            action = "created"
        else:
            record = merge_task(board.tasks[idx], changes, now)
            board.tasks[idx] = record
            action = "updated"

        self.write_board(board)
        logger.info("task %s", action, extra={"task": task_id, "backend": self.mode})
        return record

    def delete(self, task_id: str) -> None:
        board = self._read_document()
        before = len(board.tasks)
        board.tasks = [t for t in board.tasks if t.id != task_id]
        self.write_board(board)
        if len(board.tasks) < before:
            logger.info("task deleted", extra={"task": task_id, "backend": self.mode})
