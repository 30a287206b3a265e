# swimschool/api/v1/enrollments.py
from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from sqlalchemy.orm import Session

from swimschool.api.deps import (
    get_db,
    get_current_user,
    get_now,
    get_blob_host,
    get_change_feed,
    get_confirm_gate,
)
from swimschool.core.rbac import require_roles, ROLE_ADMIN, ROLE_INSTRUCTOR
from swimschool.models.user import UserProfile
from swimschool.schemas.enrollment import (
    CheckInIn,
    CheckInOut,
    EnrollmentCreate,
    EnrollmentOut,
    EvaluationIn,
    PaymentDecisionIn,
    PaymentDecisionOut,
    PersonDetailsUpdate,
    ProgressOut,
    ReviewIn,
)
from swimschool.services import enrollments as lifecycle
from swimschool.services.blob_host import BlobHost
from swimschool.services.confirm import ConfirmGate
from swimschool.services.dates import local_today
from swimschool.services.realtime import ChangeFeed

router = APIRouter()

# ----------------------- inscrição -----------------------

# multipart: `data` = JSON com dados da pessoa + courseId/startDate, `slip` = comprovante
@router.post("/", response_model=EnrollmentOut, response_model_by_alias=True, status_code=status.HTTP_201_CREATED)
def create_enrollment(
    data: str = Form(...),
    slip: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    user: UserProfile = Depends(get_current_user),
    blob_host: BlobHost = Depends(get_blob_host),
    feed: ChangeFeed = Depends(get_change_feed),
    now: datetime = Depends(get_now),
):
    payload = EnrollmentCreate.model_validate_json(data)
    e = lifecycle.create_enrollment(
        db,
        user,
        payload,
        slip.file.read() if slip is not None else None,
        blob_host,
        slip_filename=(slip.filename if slip is not None else None) or "slip.png",
        today=local_today(now),
        feed=feed,
    )
    return EnrollmentOut.from_model(e)

@router.get("/", response_model=List[EnrollmentOut], response_model_by_alias=True)
def list_enrollments(
    db: Session = Depends(get_db),
    user: UserProfile = Depends(get_current_user),
):
    return [EnrollmentOut.from_model(e) for e in lifecycle.list_enrollments(db, user)]

# ----------------------- check-in (lote) -----------------------

@router.post("/check-in", response_model=CheckInOut, response_model_by_alias=True)
def check_in(
    body: CheckInIn,
    db: Session = Depends(get_db),
    staff: UserProfile = Depends(require_roles(ROLE_ADMIN, ROLE_INSTRUCTOR)),
    feed: ChangeFeed = Depends(get_change_feed),
    now: datetime = Depends(get_now),
):
    return lifecycle.check_in(db, staff, body.enrollment_ids, now=now, feed=feed)

# ----------------------- inscrição individual -----------------------

@router.get("/{enrollment_id}", response_model=EnrollmentOut, response_model_by_alias=True)
def read_enrollment(
    enrollment_id: str,
    db: Session = Depends(get_db),
    user: UserProfile = Depends(get_current_user),
):
    return EnrollmentOut.from_model(lifecycle.get_enrollment_for(db, user, enrollment_id))

@router.patch("/{enrollment_id}", response_model=EnrollmentOut, response_model_by_alias=True)
def update_personal_details(
    enrollment_id: str,
    body: PersonDetailsUpdate,
    db: Session = Depends(get_db),
    user: UserProfile = Depends(get_current_user),
    feed: ChangeFeed = Depends(get_change_feed),
):
    return EnrollmentOut.from_model(lifecycle.update_personal_details(db, user, enrollment_id, body, feed=feed))

@router.delete("/{enrollment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_enrollment(
    enrollment_id: str,
    db: Session = Depends(get_db),
    admin: UserProfile = Depends(require_roles(ROLE_ADMIN)),
    feed: ChangeFeed = Depends(get_change_feed),
):
    lifecycle.delete_enrollment(db, admin, enrollment_id, feed=feed)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# dois cliques: o primeiro devolve status=confirm_required, o segundo aplica
@router.post("/{enrollment_id}/payment", response_model=PaymentDecisionOut, response_model_by_alias=True)
def decide_payment(
    enrollment_id: str,
    body: PaymentDecisionIn,
    db: Session = Depends(get_db),
    admin: UserProfile = Depends(require_roles(ROLE_ADMIN)),
    gate: ConfirmGate = Depends(get_confirm_gate),
    feed: ChangeFeed = Depends(get_change_feed),
):
    return lifecycle.decide_payment(db, admin, enrollment_id, body.decision, gate, feed=feed)

@router.post("/{enrollment_id}/evaluation", response_model=EnrollmentOut, response_model_by_alias=True)
def evaluate(
    enrollment_id: str,
    body: EvaluationIn,
    db: Session = Depends(get_db),
    staff: UserProfile = Depends(require_roles(ROLE_ADMIN, ROLE_INSTRUCTOR)),
    feed: ChangeFeed = Depends(get_change_feed),
):
    return EnrollmentOut.from_model(lifecycle.evaluate(db, staff, enrollment_id, body.result, feed=feed))

@router.post("/{enrollment_id}/review", response_model=EnrollmentOut, response_model_by_alias=True)
def submit_review(
    enrollment_id: str,
    body: ReviewIn,
    db: Session = Depends(get_db),
    user: UserProfile = Depends(get_current_user),
    feed: ChangeFeed = Depends(get_change_feed),
    now: datetime = Depends(get_now),
):
    e = lifecycle.submit_review(db, user, enrollment_id, body.rating, body.comment, now=now, feed=feed)
    return EnrollmentOut.from_model(e)

@router.get("/{enrollment_id}/progress", response_model=ProgressOut, response_model_by_alias=True)
def read_progress(
    enrollment_id: str,
    db: Session = Depends(get_db),
    user: UserProfile = Depends(get_current_user),
):
    return lifecycle.progress(db, user, enrollment_id)
