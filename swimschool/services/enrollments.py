# swimschool/services/enrollments.py
"""
Ciclo de vida da inscrição.

Cada função aqui é dona de uma transição: valida, grava (a gravação primária
propaga qualquer falha) e só então dispara as notificações, que são
best-effort. Depois de cada commit o ChangeFeed recebe o documento novo.

    paymentStatus: PENDING -> PAID | REJECTED, PAID <-> REJECTED (override do admin)
    evaluation:    PENDING -> PASS | FAIL (sem volta)
    review:        uma única vez, só com evaluation = PASS
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Iterable, Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from swimschool.core.config import settings
from swimschool.core.errors import InvalidTransition, PermissionDenied, ReviewAlreadySubmitted, ValidationFailed
from swimschool.core.rbac import ROLE_ADMIN, ROLE_INSTRUCTOR, ensure_role
from swimschool.crud.enrollment import enrollment_crud
from swimschool.crud.user import user_crud
from swimschool.models.attendance import Attendance
from swimschool.models.enrollment import Enrollment, Evaluation, PaymentStatus
from swimschool.models.notification import NotificationType
from swimschool.models.user import STAFF_ROLES, UserProfile
from swimschool.schemas.enrollment import (
    CheckInOut,
    EnrollmentCreate,
    EnrollmentOut,
    PaymentDecisionOut,
    PersonDetailsUpdate,
    ProgressOut,
)
from swimschool.services import catalog, notifications
from swimschool.services.blob_host import BlobHost
from swimschool.services.confirm import ConfirmGate
from swimschool.services.dashboard import course_progress
from swimschool.services.dates import compute_expiry_date, days_left, effective_expiry, local_today
from swimschool.services.realtime import ChangeEvent, ChangeFeed, ChangeKind, change_feed
from swimschool.services.student_id import generate_student_id

logger = logging.getLogger(__name__)

COLLECTION = "enrollments"

PAYMENT_MESSAGES = {
    PaymentStatus.PAID.value: (
        "Payment confirmed",
        "Your registration is complete. You can start classes right away.",
    ),
    PaymentStatus.REJECTED.value: (
        "Payment rejected",
        "Please check your payment slip and submit it again.",
    ),
}

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

def _publish(feed: Optional[ChangeFeed], e: Enrollment, kind: ChangeKind = ChangeKind.MODIFIED) -> None:
    if feed is None:
        return
    feed.publish(ChangeEvent(COLLECTION, e.id, kind, EnrollmentOut.from_model(e).model_dump(by_alias=True)))

def _course_title(db: Session, course_id: str) -> str:
    course = catalog.get_course(db, course_id)
    return course.title if course else "swimming course"

# ---------------------------------------------------------------------------
# Leitura
# ---------------------------------------------------------------------------
def list_enrollments(db: Session, user: UserProfile):
    return enrollment_crud.list_for(db, user)

def get_enrollment_for(db: Session, user: UserProfile, enrollment_id: str) -> Enrollment:
    e = enrollment_crud.get_or_404(db, enrollment_id)
    if e.user_id != user.uid and user.role not in STAFF_ROLES:
        raise PermissionDenied("You can only view your own enrollments.", {"enrollment_id": enrollment_id})
    return e

def progress(db: Session, user: UserProfile, enrollment_id: str) -> ProgressOut:
    e = get_enrollment_for(db, user, enrollment_id)
    course = catalog.get_course(db, e.course_id)
    sessions = course.sessions if course and course.sessions else 20
    return ProgressOut(
        enrollment_id=e.id,
        attended=len(e.attendance),
        sessions=sessions,
        percent=course_progress(e, course),
    )

# ---------------------------------------------------------------------------
# Inscrição
# ---------------------------------------------------------------------------
def create_enrollment(
    db: Session,
    user: UserProfile,
    payload: EnrollmentCreate,
    slip: Optional[bytes],
    blob_host: BlobHost,
    slip_filename: str = "slip.png",
    today: Optional[date] = None,
    feed: Optional[ChangeFeed] = change_feed,
) -> Enrollment:
    course = catalog.get_course(db, payload.course_id)
    if course is None:
        raise ValidationFailed("Course not found.", {"course_id": payload.course_id})
    if not slip:
        raise ValidationFailed("Please attach the payment slip.", {"field": "slip"})

    student_id = generate_student_id(db, course.id, course.title, today=today)
    expiry_date = compute_expiry_date(payload.start_date, course.type)
    # sem comprovante não existe inscrição: falha no upload aborta aqui
    slip_url = blob_host.upload(slip, slip_filename)

    data = payload.model_dump(exclude={"course_id", "start_date"})
    e = enrollment_crud.create(db, {
        **data,
        "student_id": student_id,
        "user_id": user.uid,
        "course_id": course.id,
        "start_date": payload.start_date,
        "expiry_date": expiry_date,
        "slip_url": slip_url,
        "payment_status": PaymentStatus.PENDING.value,
        "evaluation": Evaluation.PENDING.value,
    })
    logger.info("Enrollment %s created (%s, course %s)", e.id, student_id, course.id)
    _publish(feed, e, ChangeKind.ADDED)

    admins = user_crud.list_by_roles(db, [ROLE_ADMIN])
    notifications.notify_many(
        db,
        [a.uid for a in admins],
        "New enrollment",
        f"{e.student_name} registered for {course.title} and uploaded a payment slip. Please verify it.",
        NotificationType.SYSTEM,
        feed=feed,
    )
    return e

def update_personal_details(
    db: Session,
    user: UserProfile,
    enrollment_id: str,
    changes: PersonDetailsUpdate,
    feed: Optional[ChangeFeed] = change_feed,
) -> Enrollment:
    e = enrollment_crud.get_or_404(db, enrollment_id)
    if e.user_id != user.uid:
        raise PermissionDenied("Only the student who registered can edit these details.", {"enrollment_id": enrollment_id})
    if e.payment_status != PaymentStatus.PENDING.value:
        raise InvalidTransition("Personal details", e.payment_status, "edited")
    e = enrollment_crud.update(db, e, changes)
    _publish(feed, e)
    return e

def delete_enrollment(
    db: Session,
    actor: UserProfile,
    enrollment_id: str,
    feed: Optional[ChangeFeed] = change_feed,
) -> None:
    ensure_role(actor, ROLE_ADMIN)
    e = enrollment_crud.get_or_404(db, enrollment_id)
    db.delete(e)
    db.commit()
    logger.warning("Enrollment %s (%s) deleted by %s", enrollment_id, e.student_id, actor.uid)
    if feed is not None:
        feed.publish(ChangeEvent(COLLECTION, enrollment_id, ChangeKind.REMOVED))

# ---------------------------------------------------------------------------
# Pagamento
# ---------------------------------------------------------------------------
def decide_payment(
    db: Session,
    actor: UserProfile,
    enrollment_id: str,
    decision: str,
    gate: ConfirmGate,
    feed: Optional[ChangeFeed] = change_feed,
) -> PaymentDecisionOut:
    """
    Primeira chamada só registra a intenção; a segunda (mesmo admin, mesma
    inscrição, mesma decisão) dentro da janela aplica.
    """
    ensure_role(actor, ROLE_ADMIN)
    e = enrollment_crud.get_or_404(db, enrollment_id)
    if decision not in PAYMENT_MESSAGES:
        raise InvalidTransition("Payment", e.payment_status, decision)

    if not gate.request((actor.uid, enrollment_id, decision)):
        return PaymentDecisionOut(
            status="confirm_required",
            payment_status=e.payment_status,
            confirm_within_seconds=gate.window_seconds,
        )
    return apply_payment_decision(db, actor, e, decision, feed=feed)

def apply_payment_decision(
    db: Session,
    actor: UserProfile,
    e: Enrollment,
    decision: str,
    feed: Optional[ChangeFeed] = change_feed,
) -> PaymentDecisionOut:
    previous = e.payment_status
    if previous == decision:
        return PaymentDecisionOut(status="applied", payment_status=previous)

    e.payment_status = decision
    db.commit()
    if previous != PaymentStatus.PENDING.value:
        logger.warning("Payment of %s overridden by %s: %s -> %s", e.id, actor.uid, previous, decision)
    else:
        logger.info("Payment of %s set to %s by %s", e.id, decision, actor.uid)
    _publish(feed, e)

    title, message = PAYMENT_MESSAGES[decision]
    notifications.notify(db, e.user_id, title, message, NotificationType.PAYMENT, feed=feed)

    if decision == PaymentStatus.PAID.value:
        course = catalog.get_course(db, e.course_id)
        if course and course.instructor_name:
            instructor = user_crud.find_instructor_by_name(db, course.instructor_name)
            if instructor is not None:
                notifications.notify(
                    db,
                    instructor.uid,
                    "New student!",
                    f"{course.title} has a newly paid student: {e.student_name}.",
                    NotificationType.NEW_ENROLLMENT,
                    feed=feed,
                )
    return PaymentDecisionOut(status="applied", payment_status=decision)

# ---------------------------------------------------------------------------
# Presença
# ---------------------------------------------------------------------------
def check_in(
    db: Session,
    actor: UserProfile,
    enrollment_ids: Iterable[str],
    now: Optional[datetime] = None,
    feed: Optional[ChangeFeed] = change_feed,
) -> CheckInOut:
    """
    Cada inscrição é independente: uma falha não desfaz as outras.

    Já presentes hoje (dia civil da escola) são puladas antes de gravar;
    a gravação é um INSERT por check-in, sem reler o restante da lista.
    """
    ensure_role(actor, ROLE_ADMIN, ROLE_INSTRUCTOR)
    now = now or _utcnow()
    today = local_today(now)
    ids = list(dict.fromkeys(enrollment_ids))
    already = enrollment_crud.checked_in_on(db, ids, today)

    result = CheckInOut(checked_in=[], skipped={}, failed={})
    for enrollment_id in ids:
        e = enrollment_crud.get(db, enrollment_id)
        if e is None:
            result.skipped[enrollment_id] = "not_found"
            continue
        if e.payment_status != PaymentStatus.PAID.value:
            result.skipped[enrollment_id] = "not_paid"
            continue
        if enrollment_id in already:
            result.skipped[enrollment_id] = "already_checked_in"
            continue
        try:
            db.add(Attendance(enrollment_id=enrollment_id, checked_in_at=now, checkin_day=today))
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Check-in failed for %s", enrollment_id)
            result.failed[enrollment_id] = exc.__class__.__name__
            continue
        result.checked_in.append(enrollment_id)
        _publish(feed, e)

    logger.info(
        "Check-in: %d recorded, %d skipped, %d failed",
        len(result.checked_in), len(result.skipped), len(result.failed),
    )
    return result

# ---------------------------------------------------------------------------
# Avaliação e review
# ---------------------------------------------------------------------------
def evaluate(
    db: Session,
    actor: UserProfile,
    enrollment_id: str,
    result: str,
    feed: Optional[ChangeFeed] = change_feed,
) -> Enrollment:
    ensure_role(actor, ROLE_ADMIN, ROLE_INSTRUCTOR)
    e = enrollment_crud.get_or_404(db, enrollment_id)
    if e.payment_status != PaymentStatus.PAID.value:
        raise ValidationFailed("Only paid enrollments can be evaluated.", {"payment_status": e.payment_status})
    if e.evaluation == result:
        return e
    if e.evaluation != Evaluation.PENDING.value:
        raise InvalidTransition("Evaluation", e.evaluation, result)

    e.evaluation = result
    db.commit()
    _publish(feed, e)

    if result == Evaluation.PASS.value:
        message = f"Congratulations! {e.student_name} has passed the swimming course."
    else:
        message = "Evaluation result: not passed yet. Keep practising and try again!"
    notifications.notify(db, e.user_id, "Evaluation result", message, NotificationType.EVALUATION, feed=feed)
    return e

def submit_review(
    db: Session,
    user: UserProfile,
    enrollment_id: str,
    rating: int,
    comment: str,
    now: Optional[datetime] = None,
    feed: Optional[ChangeFeed] = change_feed,
) -> Enrollment:
    e = enrollment_crud.get_or_404(db, enrollment_id)
    if e.user_id != user.uid:
        raise PermissionDenied("Only the enrolled student can review this course.", {"enrollment_id": enrollment_id})
    if e.evaluation != Evaluation.PASS.value:
        raise ValidationFailed("A review can only be written after passing the course.", {"evaluation": e.evaluation})
    if not 1 <= rating <= 5:
        raise ValidationFailed("Rating must be between 1 and 5.", {"rating": rating})

    # escrita condicional: nunca sobrescreve um review existente
    stmt = (
        update(Enrollment)
        .where(Enrollment.id == enrollment_id, Enrollment.review_rating.is_(None))
        .values(review_rating=rating, review_comment=comment, review_created_at=now or _utcnow())
        .execution_options(synchronize_session=False)
    )
    written = db.execute(stmt).rowcount
    if not written:
        db.rollback()
        raise ReviewAlreadySubmitted(enrollment_id)
    db.commit()
    db.refresh(e)
    _publish(feed, e)

    staff = user_crud.list_by_roles(db, STAFF_ROLES)
    notifications.notify_many(
        db,
        [s.uid for s in staff],
        "New student review",
        f"{e.student_name} reviewed {_course_title(db, e.course_id)}.",
        NotificationType.EVALUATION,
        feed=feed,
    )
    return e

# ---------------------------------------------------------------------------
# Validade
# ---------------------------------------------------------------------------
def check_expiring_enrollments(
    db: Session,
    actor: UserProfile,
    now: Optional[datetime] = None,
    feed: Optional[ChangeFeed] = change_feed,
) -> int:
    """Varredura manual: um aviso EXPIRY por inscrição paga com 0 < daysLeft <= 30."""
    ensure_role(actor, ROLE_ADMIN, ROLE_INSTRUCTOR)
    now = now or _utcnow()
    courses = catalog.courses_by_id(db)

    sent = 0
    for e in enrollment_crud.list_paid(db):
        course = courses.get(e.course_id)
        expiry = effective_expiry(e.expiry_date, e.start_date, course.type if course else None)
        remaining = days_left(expiry, now)
        if remaining is None or not 0 < remaining <= settings.EXPIRY_ALERT_DAYS:
            continue
        title = course.title if course else "swimming course"
        delivered = notifications.notify(
            db,
            e.user_id,
            "Course expiring soon",
            f"Your {title} has {remaining} day(s) left. Please plan to finish your lessons.",
            NotificationType.EXPIRY,
            feed=feed,
        )
        if delivered is not None:
            sent += 1

    logger.info("Expiry sweep sent %d notification(s)", sent)
    return sent
