import uuid
from enum import Enum
from datetime import date, datetime, timezone
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Date, DateTime
from swimschool.db.base_class import Base

class LeaveStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

class LeaveRequest(Base):
    __tablename__ = "leave_requests"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    user_id: Mapped[str] = mapped_column(String(128), index=True)
    student_name: Mapped[str] = mapped_column(String(160), default="")
    enrollment_id: Mapped[str] = mapped_column(String(32), index=True)
    course_name: Mapped[str] = mapped_column(String(200), default="Unknown")
    leave_date: Mapped[date] = mapped_column(Date)
    reason: Mapped[str] = mapped_column(Text(), default="")
    status: Mapped[str] = mapped_column(String(16), default=LeaveStatus.PENDING.value)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
