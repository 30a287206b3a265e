# swimschool/api/v1/notifications.py
from __future__ import annotations
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from swimschool.api.deps import get_db, get_current_user, get_change_feed, get_now
from swimschool.core.rbac import require_roles, ROLE_ADMIN, ROLE_INSTRUCTOR
from swimschool.models.user import UserProfile
from swimschool.schemas.notification import (
    BroadcastIn,
    BroadcastOut,
    ExpirySweepOut,
    MarkReadIn,
    MarkReadOut,
    NotificationOut,
)
from swimschool.services import notifications
from swimschool.services.enrollments import check_expiring_enrollments
from swimschool.services.realtime import ChangeFeed

router = APIRouter()

@router.get("/", response_model=List[NotificationOut], response_model_by_alias=True)
def list_notifications(
    unread: bool = Query(False),
    db: Session = Depends(get_db),
    user: UserProfile = Depends(get_current_user),
):
    return [NotificationOut.from_model(n) for n in notifications.list_for(db, user, unread_only=unread)]

@router.post("/read", response_model=MarkReadOut)
def mark_read(
    body: MarkReadIn,
    db: Session = Depends(get_db),
    user: UserProfile = Depends(get_current_user),
    feed: ChangeFeed = Depends(get_change_feed),
):
    return MarkReadOut(updated=notifications.mark_read(db, user, body.ids, feed=feed))

@router.post("/broadcast", response_model=BroadcastOut)
def broadcast(
    body: BroadcastIn,
    db: Session = Depends(get_db),
    admin: UserProfile = Depends(require_roles(ROLE_ADMIN)),
    feed: ChangeFeed = Depends(get_change_feed),
):
    return BroadcastOut(delivered=notifications.broadcast(db, admin, body.title, body.message, body.audience, feed=feed))

# varredura manual; não há agendador
@router.post("/expiry-sweep", response_model=ExpirySweepOut)
def expiry_sweep(
    db: Session = Depends(get_db),
    staff: UserProfile = Depends(require_roles(ROLE_ADMIN, ROLE_INSTRUCTOR)),
    feed: ChangeFeed = Depends(get_change_feed),
    now: datetime = Depends(get_now),
):
    return ExpirySweepOut(sent=check_expiring_enrollments(db, staff, now=now, feed=feed))
