from enum import Enum
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Integer, Boolean, DateTime
from swimschool.db.base_class import Base

class CourseType(str, Enum):
    Normal = "Normal"
    Private = "Private"
    Baby = "Baby"

class Course(Base):
    """
    Registro salvo de um curso. Sobrepõe (campo a campo) o catálogo padrão de
    mesmo id; campos None são preenchidos pelo padrão (ver services.catalog).
    """
    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    age_group: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    type: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    sessions: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    price: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    time_slot: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    capacity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_open: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    terms: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    instructor_name: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    pool_location: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
