from typing import List
from sqlalchemy import select
from sqlalchemy.orm import Session
from swimschool.crud.base import CRUDBase
from swimschool.models.notification import Notification

class CRUDNotification(CRUDBase[Notification]):
    def list_for_user(self, db: Session, user_id: str, unread_only: bool = False) -> List[Notification]:
        stmt = select(Notification).where(Notification.user_id == user_id)
        if unread_only:
            stmt = stmt.where(Notification.read.is_(False))
        return list(db.scalars(stmt.order_by(Notification.date.desc())).all())

notification_crud = CRUDNotification(Notification, "Notification")
