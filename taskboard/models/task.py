from sqlalchemy import Column, DateTime, Index, String, Text
from taskboard.database import Base


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    assignee = Column(String, nullable=False)
    status = Column(String, nullable=False)
    priority = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)


# Board columns group by status; reads order newest-first
Index("tasks_status_idx", Task.status)
Index("tasks_updated_at_idx", Task.updated_at.desc())
