import uuid
from enum import Enum
from datetime import date, datetime, timezone
from typing import List, Optional
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Text, Integer, Boolean, Date, DateTime
from swimschool.db.base_class import Base

class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    REJECTED = "REJECTED"

class Evaluation(str, Enum):
    PENDING = "PENDING"
    PASS = "PASS"
    FAIL = "FAIL"

class Enrollment(Base):
    __tablename__ = "enrollments"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    # código gerado (ex.: CA68001), atribuído uma única vez
    student_id: Mapped[str] = mapped_column(String(16), index=True)
    user_id: Mapped[str] = mapped_column(String(128), index=True)
    course_id: Mapped[str] = mapped_column(String(64), index=True)

    # snapshot da pessoa no momento da inscrição
    student_name: Mapped[str] = mapped_column(String(160))
    gender: Mapped[str] = mapped_column(String(20), default="")
    age: Mapped[int] = mapped_column(Integer, default=0)
    weight: Mapped[str] = mapped_column(String(20), default="")
    height: Mapped[str] = mapped_column(String(20), default="")
    disease: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    adhd_condition: Mapped[bool] = mapped_column(Boolean, default=False)
    school: Mapped[str] = mapped_column(String(160), default="")
    phone: Mapped[str] = mapped_column(String(30), default="")

    start_date: Mapped[date] = mapped_column(Date)
    expiry_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    slip_url: Mapped[str] = mapped_column(String(500))
    payment_status: Mapped[str] = mapped_column(String(16), index=True, default=PaymentStatus.PENDING.value)
    evaluation: Mapped[str] = mapped_column(String(16), default=Evaluation.PENDING.value)

    review_rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    review_comment: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    review_created_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    attendance: Mapped[List["Attendance"]] = relationship(
        "Attendance",
        back_populates="enrollment",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Attendance.checked_in_at",
    )

    @property
    def has_review(self) -> bool:
        return self.review_rating is not None
