from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from taskboard.db.models import TaskStatus, TaskPriority
from taskboard.schemas.common import RecordId

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 2000


class TaskCreate(BaseModel):
    # status is not accepted here, new tasks always start as TODO
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    priority: TaskPriority = TaskPriority.medium
    due_date: Optional[date] = None
    list_id: Optional[RecordId] = None


class TaskUpdate(BaseModel):
    """Partial update: only fields present in the request body are applied."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = None
    list_id: Optional[RecordId] = None

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        for name in ("title", "status", "priority"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ListSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: str


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str]
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[date]
    list_id: Optional[int]
    task_list: Optional[ListSummary] = None
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime]


class StatusHistoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    task_id: int
    old_status: TaskStatus
    new_status: TaskStatus
    changed_at: datetime


class Counters(BaseModel):
    total: int = 0
    TODO: int = 0
    IN_PROGRESS: int = 0
    DONE: int = 0


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class TaskData(BaseModel):
    task: TaskOut


class TaskListData(BaseModel):
    tasks: List[TaskOut]
    counters: Counters
    pagination: Pagination


# search responses carry neither counters nor pagination
class SearchData(BaseModel):
    tasks: List[TaskOut]


class HistoryData(BaseModel):
    history: List[StatusHistoryOut]
