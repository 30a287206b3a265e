# swimschool/api/v1/leave_requests.py
from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from swimschool.api.deps import get_db, get_current_user, get_change_feed
from swimschool.core.rbac import require_roles, ROLE_ADMIN, ROLE_INSTRUCTOR
from swimschool.models.user import UserProfile
from swimschool.schemas.leave_request import LeaveDecisionIn, LeaveRequestCreate, LeaveRequestOut
from swimschool.services import leave
from swimschool.services.realtime import ChangeFeed

router = APIRouter()

@router.post("/", response_model=LeaveRequestOut, response_model_by_alias=True, status_code=status.HTTP_201_CREATED)
def request_leave(
    body: LeaveRequestCreate,
    db: Session = Depends(get_db),
    user: UserProfile = Depends(get_current_user),
    feed: ChangeFeed = Depends(get_change_feed),
):
    r = leave.request_leave(db, user, body.enrollment_id, body.leave_date, body.reason, feed=feed)
    return LeaveRequestOut.from_model(r)

@router.get("/", response_model=List[LeaveRequestOut], response_model_by_alias=True)
def list_leave_requests(
    db: Session = Depends(get_db),
    user: UserProfile = Depends(get_current_user),
):
    return [LeaveRequestOut.from_model(r) for r in leave.list_leave_requests(db, user)]

@router.post("/{request_id}/decision", response_model=LeaveRequestOut, response_model_by_alias=True)
def decide_leave(
    request_id: str,
    body: LeaveDecisionIn,
    db: Session = Depends(get_db),
    staff: UserProfile = Depends(require_roles(ROLE_ADMIN, ROLE_INSTRUCTOR)),
    feed: ChangeFeed = Depends(get_change_feed),
):
    return LeaveRequestOut.from_model(leave.decide_leave(db, staff, request_id, body.decision, feed=feed))
