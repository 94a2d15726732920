from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from taskboard.api import deps
from taskboard.core.config import Settings
from taskboard.core.security import AuthContext
from taskboard.db.models import TaskPriority, TaskStatus
from taskboard.schemas.common import MAX_DB_INT, Envelope, MessageData
from taskboard.schemas.tasks import (
    Counters,
    HistoryData,
    Pagination,
    StatusHistoryOut,
    TaskCreate,
    TaskData,
    TaskListData,
    TaskOut,
    TaskUpdate,
)
from taskboard.services.tasks import TaskService

TaskId = Annotated[int, Path(ge=1, le=MAX_DB_INT)]

router = APIRouter(tags=["tasks"], prefix="/tasks")


@router.post("", response_model=Envelope[TaskData], status_code=status.HTTP_201_CREATED)
def create_task(
    task_in: TaskCreate,
    current_user: AuthContext = Depends(deps.get_current_user),
    service: TaskService = Depends(deps.get_task_service),
):
    task = service.create_task(
        current_user.id,
        title=task_in.title,
        description=task_in.description,
        priority=task_in.priority,
        due_date=task_in.due_date,
        list_id=task_in.list_id,
    )
    return Envelope(data=TaskData(task=TaskOut.model_validate(task)))


@router.get("", response_model=Envelope[TaskListData])
def list_tasks(
    page: int = Query(default=1, ge=1, le=MAX_DB_INT),
    limit: Optional[int] = Query(default=None, ge=1, le=MAX_DB_INT),
    status_filter: Optional[TaskStatus] = Query(default=None, alias="status"),
    priority_filter: Optional[TaskPriority] = Query(default=None, alias="priority"),
    list_id: Optional[int] = Query(default=None, ge=1, le=MAX_DB_INT),
    current_user: AuthContext = Depends(deps.get_current_user),
    service: TaskService = Depends(deps.get_task_service),
    settings: Settings = Depends(deps.get_settings),
):
    limit = min(limit or settings.DEFAULT_PAGE_LIMIT, settings.MAX_PAGE_LIMIT)
    result = service.list_tasks(
        current_user.id,
        page=page,
        limit=limit,
        status=status_filter,
        priority=priority_filter,
        list_id=list_id,
    )
    return Envelope(
        data=TaskListData(
            tasks=[TaskOut.model_validate(t) for t in result.tasks],
            counters=Counters(**result.counters),
            pagination=Pagination(
                page=result.page,
                limit=result.limit,
                total=result.total,
                total_pages=result.total_pages,
            ),
        )
    )


@router.get("/{task_id}", response_model=Envelope[TaskData])
def get_task(
    task_id: TaskId,
    current_user: AuthContext = Depends(deps.get_current_user),
    service: TaskService = Depends(deps.get_task_service),
):
    task = service.get_task(task_id, current_user.id)
    return Envelope(data=TaskData(task=TaskOut.model_validate(task)))


@router.patch("/{task_id}", response_model=Envelope[TaskData])
def update_task(
    task_id: TaskId,
    task_in: TaskUpdate,
    current_user: AuthContext = Depends(deps.get_current_user),
    service: TaskService = Depends(deps.get_task_service),
):
    task = service.update_task(task_id, current_user.id, task_in.changes())
    return Envelope(data=TaskData(task=TaskOut.model_validate(task)))


@router.delete("/{task_id}", response_model=Envelope[MessageData])
def delete_task(
    task_id: TaskId,
    current_user: AuthContext = Depends(deps.get_current_user),
    service: TaskService = Depends(deps.get_task_service),
):
    service.delete_task(task_id, current_user.id)
    return Envelope(data=MessageData(message="Task deleted."))


@router.get("/{task_id}/history", response_model=Envelope[HistoryData])
def get_task_history(
    task_id: TaskId,
    current_user: AuthContext = Depends(deps.get_current_user),
    service: TaskService = Depends(deps.get_task_service),
):
    entries = service.task_history(task_id, current_user.id)
    return Envelope(data=HistoryData(history=[StatusHistoryOut.model_validate(e) for e in entries]))
