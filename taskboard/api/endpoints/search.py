from typing import Optional

from fastapi import APIRouter, Depends

from taskboard.api import deps
from taskboard.core.security import AuthContext
from taskboard.schemas.common import Envelope
from taskboard.schemas.tasks import SearchData, TaskOut
from taskboard.services.tasks import TaskService

router = APIRouter(tags=["search"])


@router.get("/search", response_model=Envelope[SearchData])
def search_tasks(
    q: Optional[str] = None,
    current_user: AuthContext = Depends(deps.get_current_user),
    service: TaskService = Depends(deps.get_task_service),
):
    tasks = service.search(current_user.id, q)
    return Envelope(data=SearchData(tasks=[TaskOut.model_validate(t) for t in tasks]))
