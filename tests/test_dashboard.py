"""
Dashboard aggregation tests (pure functions over loaded enrollments)
"""
from datetime import datetime, timezone
from types import SimpleNamespace

from swimschool.schemas.course import CourseOut
from swimschool.services import dashboard

COURSES = {
    "course-a": CourseOut(id="course-a", title="Course A", price=3000, instructor_name="Kru Fluke"),
    "course-b": CourseOut(id="course-b", title="Course B", price=4000, type="Private", sessions=10),
}

def _e(course_id, status, created, attendance=0):
    return SimpleNamespace(
        course_id=course_id,
        payment_status=status,
        created_at=created,
        attendance=[object()] * attendance,
    )

ENROLLMENTS = [
    _e("course-b", "PAID", datetime(2025, 2, 3, tzinfo=timezone.utc)),
    _e("course-a", "PAID", datetime(2024, 12, 20, tzinfo=timezone.utc)),
    _e("course-a", "PAID", datetime(2025, 1, 5, tzinfo=timezone.utc)),
    _e("gone-course", "PAID", datetime(2025, 1, 7, tzinfo=timezone.utc)),
    _e("course-a", "PENDING", datetime(2025, 1, 8, tzinfo=timezone.utc)),
    _e("course-b", "REJECTED", datetime(2025, 1, 9, tzinfo=timezone.utc)),
]

def test_revenue_is_bucketed_chronologically():
    rows = dashboard.revenue_by_month(ENROLLMENTS, COURSES)
    assert [(r.name, r.revenue) for r in rows] == [("Dec 24", 3000), ("Jan 25", 3000), ("Feb 25", 4000)]

def test_month_follows_school_timezone():
    # 31/01 20:00 UTC já é fevereiro em Bangkok
    late = [_e("course-a", "PAID", datetime(2025, 1, 31, 20, 0, tzinfo=timezone.utc))]
    assert [r.name for r in dashboard.revenue_by_month(late, COURSES)] == ["Feb 25"]

def test_enrollment_counts_by_month_and_course():
    rows, names = dashboard.enrollment_count_by_month_and_course(ENROLLMENTS, COURSES)
    assert rows == [
        {"name": "Dec 24", "Course A": 1},
        {"name": "Jan 25", "Course A": 1, "Unknown": 1},
        {"name": "Feb 25", "Course B": 1},
    ]
    assert names == ["Course A", "Unknown", "Course B"]

def test_instructor_load_and_unknown_bucket():
    assert dashboard.instructor_load(ENROLLMENTS, COURSES) == {"Kru Fluke": 2, "Unassigned": 2}

def test_status_breakdown():
    assert dashboard.status_breakdown(ENROLLMENTS) == {"PENDING": 1, "PAID": 4, "REJECTED": 1}

def test_summary_and_full_stats():
    stats = dashboard.build_stats(ENROLLMENTS, COURSES)
    assert (stats.total_income, stats.total_students, stats.pending_payments) == (10000, 6, 1)
    payload = stats.model_dump(by_alias=True)
    assert set(payload) >= {"totalIncome", "monthlyRevenue", "monthlyEnrollments", "instructorLoad", "statusBreakdown"}

def test_course_progress_caps_at_100():
    assert dashboard.course_progress(_e("course-b", "PAID", None, attendance=5), COURSES["course-b"]) == 50.0
    assert dashboard.course_progress(_e("course-b", "PAID", None, attendance=12), COURSES["course-b"]) == 100.0
    # sem curso: 20 aulas
    assert dashboard.course_progress(_e("x", "PAID", None, attendance=5), None) == 25.0
