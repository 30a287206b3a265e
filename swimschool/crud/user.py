from typing import Iterable, List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from swimschool.crud.base import CRUDBase
from swimschool.models.user import UserProfile, UserRole

class CRUDUser(CRUDBase[UserProfile]):
    def list_by_roles(self, db: Session, roles: Iterable[str]) -> List[UserProfile]:
        return list(db.scalars(select(UserProfile).where(UserProfile.role.in_(list(roles)))).all())

    def list_all(self, db: Session) -> List[UserProfile]:
        return list(db.scalars(select(UserProfile).order_by(UserProfile.created_at.desc())).all())

    def find_instructor_by_name(self, db: Session, display_name: str) -> Optional[UserProfile]:
        # o curso guarda só o nome do instrutor; casamos pelo displayName
        return db.scalars(
            select(UserProfile)
            .where(UserProfile.role == UserRole.INSTRUCTOR.value, UserProfile.display_name == display_name)
            .order_by(UserProfile.created_at)
            .limit(1)
        ).first()

user_crud = CRUDUser(UserProfile, "User")
