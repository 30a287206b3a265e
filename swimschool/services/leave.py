# swimschool/services/leave.py
from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from swimschool.core.errors import InvalidTransition, PermissionDenied, ValidationFailed
from swimschool.core.rbac import ROLE_ADMIN, ROLE_INSTRUCTOR, ensure_role
from swimschool.crud.enrollment import enrollment_crud
from swimschool.crud.leave_request import leave_request_crud
from swimschool.models.enrollment import PaymentStatus
from swimschool.models.leave_request import LeaveRequest, LeaveStatus
from swimschool.models.notification import NotificationType
from swimschool.models.user import UserProfile
from swimschool.schemas.leave_request import LeaveRequestOut
from swimschool.services import catalog, notifications
from swimschool.services.realtime import ChangeEvent, ChangeFeed, ChangeKind, change_feed

logger = logging.getLogger(__name__)

COLLECTION = "leave_requests"

def _publish(feed: Optional[ChangeFeed], r: LeaveRequest, kind: ChangeKind) -> None:
    if feed is not None:
        feed.publish(ChangeEvent(COLLECTION, r.id, kind, LeaveRequestOut.from_model(r).model_dump(by_alias=True)))

def request_leave(
    db: Session,
    user: UserProfile,
    enrollment_id: str,
    leave_date: date,
    reason: str,
    feed: Optional[ChangeFeed] = change_feed,
) -> LeaveRequest:
    e = enrollment_crud.get_or_404(db, enrollment_id)
    if e.user_id != user.uid:
        raise PermissionDenied("You can only request leave for your own enrollment.", {"enrollment_id": enrollment_id})
    if e.payment_status != PaymentStatus.PAID.value:
        raise ValidationFailed(
            "Leave can only be requested for a paid enrollment.",
            {"enrollment_id": enrollment_id, "payment_status": e.payment_status},
        )

    course = catalog.get_course(db, e.course_id)
    r = leave_request_crud.create(db, {
        "user_id": user.uid,
        "student_name": e.student_name,
        "enrollment_id": e.id,
        # nome copiado agora; se o curso sumir depois o pedido continua legível
        "course_name": course.title if course else "Unknown",
        "leave_date": leave_date,
        "reason": reason,
        "status": LeaveStatus.PENDING.value,
    })
    _publish(feed, r, ChangeKind.ADDED)
    return r

def decide_leave(
    db: Session,
    actor: UserProfile,
    request_id: str,
    decision: str,
    feed: Optional[ChangeFeed] = change_feed,
) -> LeaveRequest:
    ensure_role(actor, ROLE_ADMIN, ROLE_INSTRUCTOR)
    r = leave_request_crud.get_or_404(db, request_id)
    if r.status != LeaveStatus.PENDING.value:
        raise InvalidTransition("Leave request", r.status, decision)

    r = leave_request_crud.update(db, r, {"status": decision})
    logger.info("Leave request %s %s by %s", r.id, decision.lower(), actor.uid)
    _publish(feed, r, ChangeKind.MODIFIED)

    day = r.leave_date.strftime("%d/%m/%Y")
    if decision == LeaveStatus.APPROVED.value:
        message = f"Your leave request for {day} has been approved."
    else:
        message = f"Your leave request for {day} was rejected."
    notifications.notify(db, r.user_id, "Leave request update", message, NotificationType.LEAVE, feed=feed)
    return r

def list_leave_requests(db: Session, user: UserProfile) -> List[LeaveRequest]:
    return leave_request_crud.list_for(db, user)
