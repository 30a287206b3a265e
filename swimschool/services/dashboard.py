# swimschool/services/dashboard.py
"""
Agregações do painel do admin. Funções puras sobre listas já carregadas:
nada aqui grava no banco.

Curso que não resolve mais (id antigo/apagado) cai no balde "Unknown",
instrutor "Unassigned" e preço 0, em vez de quebrar o painel.
"""
from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from sqlalchemy.orm import Session

from swimschool.crud.enrollment import enrollment_crud
from swimschool.models.enrollment import PaymentStatus
from swimschool.schemas.course import CourseOut
from swimschool.schemas.dashboard import DashboardStats, MonthlyRevenue
from swimschool.services.catalog import courses_by_id
from swimschool.services.dates import local_today

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
UNKNOWN_COURSE = "Unknown"
UNASSIGNED = "Unassigned"
DEFAULT_SESSIONS = 20

Courses = Mapping[str, CourseOut]

def _month(e) -> Tuple[int, int]:
    d = local_today(e.created_at)
    return d.year, d.month

def month_label(key: Tuple[int, int]) -> str:
    year, month = key
    return f"{MONTHS[month - 1]} {str(year)[-2:]}"

def _paid(enrollments: Iterable) -> List:
    return [e for e in enrollments if e.payment_status == PaymentStatus.PAID.value]

def _price(courses: Courses, course_id: str) -> int:
    c = courses.get(course_id)
    return (c.price or 0) if c else 0

def _title(courses: Courses, course_id: str) -> str:
    c = courses.get(course_id)
    return c.title if c and c.title else UNKNOWN_COURSE

def revenue_by_month(enrollments: Iterable, courses: Courses) -> List[MonthlyRevenue]:
    totals: Dict[Tuple[int, int], int] = defaultdict(int)
    for e in _paid(enrollments):
        totals[_month(e)] += _price(courses, e.course_id)
    return [MonthlyRevenue(name=month_label(k), revenue=totals[k]) for k in sorted(totals)]

def enrollment_count_by_month_and_course(enrollments: Iterable, courses: Courses) -> Tuple[List[Dict[str, Any]], List[str]]:
    """Linhas {"name": "Jan 25", "<título>": n} em ordem cronológica + títulos na ordem em que apareceram."""
    counts: Dict[Tuple[int, int], Dict[str, int]] = defaultdict(lambda: defaultdict(int))
    names: List[str] = []
    for e in sorted(_paid(enrollments), key=lambda x: _month(x)):
        title = _title(courses, e.course_id)
        counts[_month(e)][title] += 1
        if title not in names:
            names.append(title)
    rows = [{"name": month_label(k), **counts[k]} for k in sorted(counts)]
    return rows, names

def instructor_load(enrollments: Iterable, courses: Courses) -> Dict[str, int]:
    load: Dict[str, int] = defaultdict(int)
    for e in _paid(enrollments):
        c = courses.get(e.course_id)
        load[(c.instructor_name if c else None) or UNASSIGNED] += 1
    return dict(load)

def status_breakdown(enrollments: Iterable) -> Dict[str, int]:
    counts = {s.value: 0 for s in PaymentStatus}
    for e in enrollments:
        if e.payment_status in counts:
            counts[e.payment_status] += 1
    return counts

def summary(enrollments: Iterable, courses: Courses) -> Dict[str, int]:
    items = list(enrollments)
    return {
        "total_income": sum(_price(courses, e.course_id) for e in _paid(items)),
        "total_students": len(items),
        "pending_payments": sum(1 for e in items if e.payment_status == PaymentStatus.PENDING.value),
    }

def course_progress(enrollment, course: Optional[CourseOut]) -> float:
    sessions = (course.sessions if course else None) or DEFAULT_SESSIONS
    return min(len(enrollment.attendance) * 100 / sessions, 100.0)

def build_stats(enrollments: Iterable, courses: Courses) -> DashboardStats:
    items = list(enrollments)
    rows, names = enrollment_count_by_month_and_course(items, courses)
    return DashboardStats(
        **summary(items, courses),
        monthly_revenue=revenue_by_month(items, courses),
        monthly_enrollments=rows,
        course_names=names,
        instructor_load=instructor_load(items, courses),
        status_breakdown=status_breakdown(items),
    )

def dashboard_stats(db: Session) -> DashboardStats:
    return build_stats(enrollment_crud.get_multi(db, limit=None), courses_by_id(db))
