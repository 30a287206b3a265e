from typing import List
from sqlalchemy import select
from sqlalchemy.orm import Session
from swimschool.crud.base import CRUDBase
from swimschool.models.leave_request import LeaveRequest
from swimschool.models.user import UserProfile, STAFF_ROLES

class CRUDLeaveRequest(CRUDBase[LeaveRequest]):
    def list_for(self, db: Session, user: UserProfile) -> List[LeaveRequest]:
        stmt = select(LeaveRequest)
        if user.role not in STAFF_ROLES:
            stmt = stmt.where(LeaveRequest.user_id == user.uid)
        return list(db.scalars(stmt.order_by(LeaveRequest.created_at.desc())).all())

leave_request_crud = CRUDLeaveRequest(LeaveRequest, "Leave request")
