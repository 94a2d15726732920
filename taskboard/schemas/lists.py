from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from taskboard.db.models import DEFAULT_LIST_COLOR
from taskboard.schemas.common import MAX_DB_INT

COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class ListCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=100)
    color: str = Field(default=DEFAULT_LIST_COLOR, pattern=COLOR_PATTERN)
    position: int = Field(default=0, ge=0, le=MAX_DB_INT)


class ListUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    color: Optional[str] = Field(default=None, pattern=COLOR_PATTERN)
    position: Optional[int] = Field(default=None, ge=0, le=MAX_DB_INT)

    @model_validator(mode="after")
    def reject_nulls(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ListOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: str
    position: int
    created_at: datetime


class ListWithCount(ListOut):
    task_count: int = 0


class ListData(BaseModel):
    list: ListOut


class ListsData(BaseModel):
    lists: List[ListWithCount]
