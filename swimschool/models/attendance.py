from datetime import date, datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import ForeignKey, Index, Date, DateTime
from swimschool.db.base_class import Base

class Attendance(Base):
    """Um check-in. Inserção pura: nunca reescreve os demais registros da matrícula."""
    __tablename__ = "enrollment_attendance"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    enrollment_id: Mapped[str] = mapped_column(ForeignKey("enrollments.id", ondelete="CASCADE"))
    checked_in_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    # dia civil no fuso da escola; sem unique (ver DESIGN.md)
    checkin_day: Mapped[date] = mapped_column(Date)

    enrollment = relationship("Enrollment", back_populates="attendance")

    __table_args__ = (Index("ix_attendance_enrollment_day", "enrollment_id", "checkin_day"),)
