import uuid
from enum import Enum
from datetime import datetime, timezone
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Boolean, DateTime, Index
from swimschool.db.base_class import Base

class NotificationType(str, Enum):
    PAYMENT = "PAYMENT"
    EVALUATION = "EVALUATION"
    SYSTEM = "SYSTEM"
    EXPIRY = "EXPIRY"
    NEW_ENROLLMENT = "NEW_ENROLLMENT"
    LEAVE = "LEAVE"

class Notification(Base):
    __tablename__ = "notifications"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    user_id: Mapped[str] = mapped_column(String(128))
    title: Mapped[str] = mapped_column(String(200))
    message: Mapped[str] = mapped_column(Text())
    type: Mapped[str] = mapped_column(String(20), default=NotificationType.SYSTEM.value)
    read: Mapped[bool] = mapped_column(Boolean, default=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (Index("ix_notifications_user_read", "user_id", "read"),)
