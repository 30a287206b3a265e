from datetime import date
from typing import Iterable, List, Set
from sqlalchemy import select
from sqlalchemy.orm import Session
from swimschool.crud.base import CRUDBase
from swimschool.models.attendance import Attendance
from swimschool.models.enrollment import Enrollment, PaymentStatus
from swimschool.models.user import UserProfile, UserRole

class CRUDEnrollment(CRUDBase[Enrollment]):
    def list_for(self, db: Session, user: UserProfile) -> List[Enrollment]:
        """Escopo por papel: admin vê tudo, instrutor só PAID, aluno só as próprias."""
        stmt = select(Enrollment)
        if user.role == UserRole.INSTRUCTOR.value:
            stmt = stmt.where(Enrollment.payment_status == PaymentStatus.PAID.value)
        elif user.role != UserRole.ADMIN.value:
            stmt = stmt.where(Enrollment.user_id == user.uid)
        return list(db.scalars(stmt.order_by(Enrollment.created_at.desc())).all())

    def list_paid(self, db: Session) -> List[Enrollment]:
        return list(db.scalars(select(Enrollment).where(Enrollment.payment_status == PaymentStatus.PAID.value)).all())

    def list_reviewed_for_course(self, db: Session, course_id: str) -> List[Enrollment]:
        return list(db.scalars(
            select(Enrollment)
            .where(Enrollment.course_id == course_id, Enrollment.review_rating.is_not(None))
            .order_by(Enrollment.review_created_at.desc())
        ).all())

    def checked_in_on(self, db: Session, enrollment_ids: Iterable[str], day: date) -> Set[str]:
        ids = list(enrollment_ids)
        if not ids:
            return set()
        rows = db.scalars(
            select(Attendance.enrollment_id).where(Attendance.enrollment_id.in_(ids), Attendance.checkin_day == day)
        ).all()
        return set(rows)

enrollment_crud = CRUDEnrollment(Enrollment, "Enrollment")
