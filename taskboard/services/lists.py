import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from taskboard.core.errors import AuthorizationError, NotFoundError
from taskboard.db.models import DEFAULT_LIST_COLOR, ListDB, TaskDB

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "color", "position")


class ListService:
    def __init__(self, db: Session):
        self.db = db

    def get_list(self, list_id: int, requester_id: int) -> ListDB:
        task_list = self.db.query(ListDB).filter(ListDB.id == list_id).first()
        if not task_list:
            raise NotFoundError("List not found.")
        if task_list.owner_id != requester_id:
            raise AuthorizationError("Access to this list is not allowed.")
        return task_list

    def create_list(
        self,
        owner_id: int,
        name: str,
        color: Optional[str] = None,
        position: Optional[int] = None,
    ) -> ListDB:
        task_list = ListDB(
            owner_id=owner_id,
            name=name,
            color=color or DEFAULT_LIST_COLOR,
            position=position or 0,
        )
        self.db.add(task_list)
        self.db.commit()
        self.db.refresh(task_list)
        return task_list

    def list_lists(self, owner_id: int) -> List[Tuple[ListDB, int]]:
        """Owned lists with a live count of the tasks that reference each one."""
        return (
            self.db.query(ListDB, func.count(TaskDB.id))
            .outerjoin(TaskDB, TaskDB.list_id == ListDB.id)
            .filter(ListDB.owner_id == owner_id)
            .group_by(ListDB.id)
            .order_by(ListDB.position.asc(), ListDB.name.asc())
            .all()
        )

    def update_list(self, list_id: int, requester_id: int, changes: Dict[str, Any]) -> ListDB:
        task_list = self.get_list(list_id, requester_id)
        for field in UPDATABLE_FIELDS:
            if field in changes:
                setattr(task_list, field, changes[field])
        self.db.commit()
        self.db.refresh(task_list)
        return task_list

    def delete_list(self, list_id: int, requester_id: int) -> int:
        """
        Detach every task from the list, then remove the list.

        Both statements share one transaction. Returns how many tasks were detached.
        """
        task_list = self.get_list(list_id, requester_id)

        detached = (
            self.db.query(TaskDB)
            .filter(TaskDB.list_id == task_list.id)
            .update({TaskDB.list_id: None}, synchronize_session="fetch")
        )
        self.db.delete(task_list)
        self.db.commit()

        logger.info("Deleted list id=%s, detached %s task(s)", list_id, detached)
        return detached
