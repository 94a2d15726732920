from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from taskboard.api import deps
from taskboard.core.security import AuthContext
from taskboard.schemas.common import MAX_DB_INT, Envelope, MessageData
from taskboard.schemas.lists import ListCreate, ListData, ListOut, ListsData, ListUpdate, ListWithCount
from taskboard.services.lists import ListService

ListId = Annotated[int, Path(ge=1, le=MAX_DB_INT)]

router = APIRouter(tags=["lists"], prefix="/lists")


@router.post("", response_model=Envelope[ListData], status_code=status.HTTP_201_CREATED)
def create_list(
    list_in: ListCreate,
    current_user: AuthContext = Depends(deps.get_current_user),
    service: ListService = Depends(deps.get_list_service),
):
    task_list = service.create_list(
        current_user.id,
        name=list_in.name,
        color=list_in.color,
        position=list_in.position,
    )
    return Envelope(data=ListData(list=ListOut.model_validate(task_list)))


@router.get("", response_model=Envelope[ListsData])
def list_lists(
    current_user: AuthContext = Depends(deps.get_current_user),
    service: ListService = Depends(deps.get_list_service),
):
    rows = service.list_lists(current_user.id)
    lists = [
        ListWithCount(**ListOut.model_validate(task_list).model_dump(), task_count=count)
        for task_list, count in rows
    ]
    return Envelope(data=ListsData(lists=lists))


@router.patch("/{list_id}", response_model=Envelope[ListData])
def update_list(
    list_id: ListId,
    list_in: ListUpdate,
    current_user: AuthContext = Depends(deps.get_current_user),
    service: ListService = Depends(deps.get_list_service),
):
    task_list = service.update_list(list_id, current_user.id, list_in.changes())
    return Envelope(data=ListData(list=ListOut.model_validate(task_list)))


@router.delete("/{list_id}", response_model=Envelope[MessageData])
def delete_list(
    list_id: ListId,
    current_user: AuthContext = Depends(deps.get_current_user),
    service: ListService = Depends(deps.get_list_service),
):
    service.delete_list(list_id, current_user.id)
    return Envelope(data=MessageData(message="List deleted."))
