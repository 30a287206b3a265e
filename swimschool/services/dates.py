# swimschool/services/dates.py
"""Datas derivadas: validade do curso, dias restantes e dia civil da escola."""
from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

from swimschool.core.config import settings
from swimschool.models.course import CourseType

BUDDHIST_ERA_OFFSET = 543

def _tz(tz_name: str | None = None) -> ZoneInfo:
    return ZoneInfo(tz_name or settings.TIMEZONE)

def _aware(now: datetime) -> datetime:
    # datetimes ingênuos (ex.: lidos do SQLite) são tratados como UTC
    return now if now.tzinfo else now.replace(tzinfo=timezone.utc)

def compute_expiry_date(start_date: date, course_type: str | None, months: int | None = None) -> Optional[date]:
    """Só cursos Normal expiram: início + N meses (3 por padrão)."""
    if course_type != CourseType.Normal.value or start_date is None:
        return None
    return start_date + relativedelta(months=months if months is not None else settings.NORMAL_COURSE_VALIDITY_MONTHS)

def effective_expiry(expiry_date: Optional[date], start_date: Optional[date], course_type: str | None) -> Optional[date]:
    """Validade explícita, senão a derivada (Normal), senão None = nunca expira."""
    if expiry_date is not None:
        return expiry_date
    if start_date is None:
        return None
    return compute_expiry_date(start_date, course_type)

def days_left(expiry: Optional[date], now: datetime, tz_name: str | None = None) -> Optional[int]:
    if expiry is None:
        return None
    expires_at = datetime.combine(expiry, time.min, tzinfo=_tz(tz_name))
    return math.ceil((expires_at - _aware(now)).total_seconds() / 86400)

def local_today(now: datetime, tz_name: str | None = None) -> date:
    return _aware(now).astimezone(_tz(tz_name)).date()

def buddhist_year_suffix(today: date) -> str:
    """2025 -> 2568 -> '68'"""
    return str(today.year + BUDDHIST_ERA_OFFSET)[-2:]
