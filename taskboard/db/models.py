from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import (
    Boolean, Column, Integer, String, Date, DateTime,
    ForeignKey, Text, Enum as SqlEnum
)
from sqlalchemy.orm import relationship

from taskboard.db.session import Base

DEFAULT_LIST_COLOR = "#3B82F6"


def utcnow() -> datetime:
    # naive UTC, SQLite has no timezone-aware column type
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TaskStatus(str, Enum):
    todo = "TODO"
    in_progress = "IN_PROGRESS"
    done = "DONE"


class TaskPriority(str, Enum):
    low = "LOW"
    medium = "MEDIUM"
    high = "HIGH"
    urgent = "URGENT"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


def _status_column_type():
    return SqlEnum(TaskStatus, name="task_status", values_callable=_enum_values)


class UserDB(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    display_name = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    failed_login_attempts = Column(Integer, default=0, nullable=False)

    lists = relationship(
        "ListDB", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )
    tasks = relationship(
        "TaskDB", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )


class ListDB(Base):
    __tablename__ = "lists"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    color = Column(String(7), default=DEFAULT_LIST_COLOR, nullable=False)
    position = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    owner = relationship("UserDB", back_populates="lists")
    tasks = relationship("TaskDB", back_populates="task_list", passive_deletes=True)


class TaskDB(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    list_id = Column(Integer, ForeignKey("lists.id", ondelete="SET NULL"), nullable=True, index=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(_status_column_type(), default=TaskStatus.todo, nullable=False)
    priority = Column(
        SqlEnum(TaskPriority, name="task_priority", values_callable=_enum_values),
        default=TaskPriority.medium,
        nullable=False,
    )
    due_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
    completed_at = Column(DateTime, nullable=True)

    owner = relationship("UserDB", back_populates="tasks")
    task_list = relationship("ListDB", back_populates="tasks")
    history = relationship(
        "TaskStatusHistoryDB",
        back_populates="task",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TaskStatusHistoryDB.id",
    )


class TaskStatusHistoryDB(Base):
    __tablename__ = "task_status_history"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    old_status = Column(_status_column_type(), nullable=False)
    new_status = Column(_status_column_type(), nullable=False)
    changed_at = Column(DateTime, default=utcnow, nullable=False)

    task = relationship("TaskDB", back_populates="history")
