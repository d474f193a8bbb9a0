import logging
import threading
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from taskboard.database import Base, make_engine
from taskboard.errors import BackendNotConfigured
from taskboard.models.task import Task
from taskboard.schemas.task import TaskRecord, build_task, merge_task
from taskboard.utils.timestamps import format_timestamp, parse_timestamp, utcnow

logger = logging.getLogger(__name__)


def _row_to_record(row: Task) -> TaskRecord:
    return TaskRecord(
        id=row.id,
        title=row.title,
        description=row.description,
        assignee=row.assignee,
        status=row.status,
        priority=row.priority,
        created_at=format_timestamp(row.created_at),
        updated_at=format_timestamp(row.updated_at),
    )


class RelationalStore:
    """Tasks as rows of the ``tasks`` table.

    The engine is built on first use and reused for the life of the process;
    the schema is ensured at most once before the first query. Upserts are a
    plain read-then-write with no row lock, so two concurrent writers to the
    same id end with whichever committed last.
    """

    mode = "db"

    def __init__(self, database_url: str, clock: Callable[[], datetime] = utcnow):
        self._database_url = database_url
        self._clock = clock
        self._engine: Optional[Engine] = None
        self._sessions: Optional[sessionmaker] = None
        self._schema_ready = False
        self._init_lock = threading.Lock()

    def _session(self) -> Session:
        if not self._database_url:
            raise BackendNotConfigured()
        if not self._schema_ready:
            # sync routes run in a threadpool; first requests may arrive together
            with self._init_lock:
                if self._engine is None:
                    self._engine = make_engine(self._database_url)
                    self._sessions = sessionmaker(autocommit=False, autoflush=False, bind=self._engine)
                if not self._schema_ready:
                    Base.metadata.create_all(bind=self._engine, checkfirst=True)
                    self._schema_ready = True
                    logger.info("task schema ready", extra={"backend": self.mode})
        return self._sessions()

    def read_all(self) -> list[TaskRecord]:
        db = self._session()
        try:
            rows = db.query(Task).order_by(Task.updated_at.desc()).all()
            return [_row_to_record(row) for row in rows]
        finally:
            db.close()

    def upsert(self, task_id: str, changes: Mapping[str, Any]) -> TaskRecord:
        db = self._session()
        try:
            now = self._clock()
            row = db.get(Task, task_id)
            if row is None:
                record = build_task(task_id, changes, now)
                db.add(Task(
                    id=record.id,
                    title=record.title,
                    description=record.description,
                    assignee=record.assignee,
                    status=record.status,
                    priority=record.priority,
                    created_at=now,
                    updated_at=now,
                ))
                db.commit()
                logger.info("task created", extra={"task": task_id, "backend": self.mode})
                return record

            record = merge_task(_row_to_record(row), changes, now)
            # write every mutable column so the whole merged state lands, not
            # just the attributes this session saw change
            db.query(Task).filter(Task.id == task_id).update({
                Task.title: record.title,
                Task.description: record.description,
                Task.assignee: record.assignee,
                Task.status: record.status,
                Task.priority: record.priority,
                Task.updated_at: parse_timestamp(record.updated_at),
            }, synchronize_session=False)
            db.commit()
            logger.info("task updated", extra={"task": task_id, "backend": self.mode})
            return record
        finally:
            db.close()

    def delete(self, task_id: str) -> None:
        db = self._session()
        try:
            deleted = db.query(Task).filter(Task.id == task_id).delete()
            db.commit()
            if deleted:
                logger.info("task deleted", extra={"task": task_id, "backend": self.mode})
        finally:
            db.close()
