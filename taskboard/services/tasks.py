"""Task rules: ownership checks, status history and list queries."""

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from taskboard.core.errors import (
    AuthorizationError,
    ForbiddenListAccessError,
    InvalidInputError,
    NotFoundError,
)
from taskboard.db.models import (
    ListDB,
    TaskDB,
    TaskPriority,
    TaskStatus,
    TaskStatusHistoryDB,
    utcnow,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "priority", "due_date", "list_id")


@dataclass
class TaskPage:
    tasks: List[TaskDB]
    counters: Dict[str, int]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def _like_pattern(keyword: str) -> str:
    escaped = keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class TaskService:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(TaskDB).options(joinedload(TaskDB.task_list))

    def _check_list_access(self, list_id: int, owner_id: int) -> None:
        task_list = self.db.query(ListDB).filter(ListDB.id == list_id).first()
        if not task_list or task_list.owner_id != owner_id:
            raise ForbiddenListAccessError()

    def get_task(self, task_id: int, requester_id: int) -> TaskDB:
        # existence is checked before ownership: 404 wins over 403
        task = self._query().filter(TaskDB.id == task_id).first()
        if not task:
            raise NotFoundError("Task not found.")
        if task.owner_id != requester_id:
            raise AuthorizationError("Access to this task is not allowed.")
        return task

    def create_task(
        self,
        owner_id: int,
        title: str,
        description: Optional[str] = None,
        priority: Optional[TaskPriority] = None,
        due_date: Optional[date] = None,
        list_id: Optional[int] = None,
    ) -> TaskDB:
        if list_id is not None:
            self._check_list_access(list_id, owner_id)

        task = TaskDB(
            owner_id=owner_id,
            title=title,
            description=description,
            status=TaskStatus.todo,
            priority=priority or TaskPriority.medium,
            due_date=due_date,
            list_id=list_id,
        )
        self.db.add(task)
        self.db.commit()
        return self.get_task(task.id, owner_id)

    def list_tasks(
        self,
        owner_id: int,
        page: int = 1,
        limit: int = 20,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        list_id: Optional[int] = None,
    ) -> TaskPage:
        q = self._query().filter(TaskDB.owner_id == owner_id)
        if status:
            q = q.filter(TaskDB.status == status)
        if priority:
            q = q.filter(TaskDB.priority == priority)
        if list_id is not None:
            q = q.filter(TaskDB.list_id == list_id)

        total = q.order_by(None).count()
        tasks = (
            q.order_by(
                TaskDB.due_date.is_(None),
                TaskDB.due_date.asc(),
                TaskDB.created_at.desc(),
                TaskDB.id.desc(),
            )
            .limit(limit)
            .offset((page - 1) * limit)
            .all()
        )

        return TaskPage(
            tasks=tasks,
            counters=self.count_by_status(owner_id),
            page=page,
            limit=limit,
            total=total,
        )

    def count_by_status(self, owner_id: int) -> Dict[str, int]:
        """Counters over every task the user owns, ignoring any list filters."""
        rows = (
            self.db.query(TaskDB.status, func.count(TaskDB.id))
            .filter(TaskDB.owner_id == owner_id)
            .group_by(TaskDB.status)
            .all()
        )

        counters = {"total": 0}
        counters.update({s.value: 0 for s in TaskStatus})
        for status, count in rows:
            key = status.value if hasattr(status, "value") else str(status)
            counters[key] = count
            counters["total"] += count
        return counters

    def update_task(self, task_id: int, requester_id: int, changes: Dict[str, Any]) -> TaskDB:
        task = self.get_task(task_id, requester_id)

        if changes.get("list_id") is not None:
            self._check_list_access(changes["list_id"], requester_id)

        for field in UPDATABLE_FIELDS:
            if field in changes:
                setattr(task, field, changes[field])

        new_status = changes.get("status")
        if new_status is not None and new_status != task.status:
            old_status = task.status
            self.db.add(
                TaskStatusHistoryDB(task_id=task.id, old_status=old_status, new_status=new_status)
            )
            task.status = new_status
            if new_status == TaskStatus.done:
                task.completed_at = utcnow()
            elif old_status == TaskStatus.done:
                task.completed_at = None
            logger.info("Task id=%s status %s -> %s", task.id, old_status.value, new_status.value)

        task.updated_at = utcnow()
        self.db.commit()
        return self.get_task(task.id, requester_id)

    def delete_task(self, task_id: int, requester_id: int) -> None:
        task = self.get_task(task_id, requester_id)
        self.db.delete(task)
        self.db.commit()

    def task_history(self, task_id: int, requester_id: int) -> List[TaskStatusHistoryDB]:
        self.get_task(task_id, requester_id)
        return (
            self.db.query(TaskStatusHistoryDB)
            .filter(TaskStatusHistoryDB.task_id == task_id)
            .order_by(TaskStatusHistoryDB.changed_at.asc(), TaskStatusHistoryDB.id.asc())
            .all()
        )

    def search(self, owner_id: int, keyword: Optional[str]) -> List[TaskDB]:
        if not keyword or not keyword.strip():
            raise InvalidInputError('The search parameter "q" is required.')

        pattern = _like_pattern(keyword.strip())
        return (
            self._query()
            .filter(
                TaskDB.owner_id == owner_id,
                or_(
                    TaskDB.title.ilike(pattern, escape="\\"),
                    TaskDB.description.ilike(pattern, escape="\\"),
                ),
            )
            .order_by(TaskDB.created_at.desc(), TaskDB.id.desc())
            .all()
        )
