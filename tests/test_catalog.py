from datetime import date

import pytest

from swimschool.core.errors import BlobUploadFailed
from swimschool.models.course import Course
from swimschool.schemas.course import CourseUpdate
from swimschool.services import catalog
from swimschool.services import enrollments as lifecycle

def test_defaults_when_nothing_is_stored(db):
    courses = catalog.list_courses(db)
    assert [c.id for c in courses] == ["course-a", "course-b", "course-c", "course-d", "baby-course"]
    a = catalog.get_course(db, "course-a")
    assert (a.type, a.price, a.sessions) == ("Normal", 3000, 20)

def test_stored_fields_win_and_defaults_fill_gaps(db):
    db.add(Course(id="course-a", price=3200, instructor_name="Kru Nok"))
    db.add(Course(id="summer-camp", title="Summer camp", type="Private", price=5000))
    db.commit()

    a = catalog.get_course(db, "course-a")
    assert (a.price, a.instructor_name) == (3200, "Kru Nok")
    assert a.title == "Course A (4-6 years, group)"
    assert catalog.list_courses(db)[-1].id == "summer-camp"
    assert catalog.get_course(db, "nope") is None

def test_save_course_uploads_image_then_merges(db, blob_host):
    out = catalog.save_course(
        db, "course-b", CourseUpdate(price=4200), image=b"png", image_filename="b.png", blob_host=blob_host,
    )
    assert out.price == 4200
    assert out.image_url.endswith("b.png")
    assert out.title == "Course B (4-6 years, private)"

def test_failed_image_upload_writes_nothing(db, blob_host):
    blob_host.fail = True
    with pytest.raises(BlobUploadFailed):
        catalog.save_course(db, "course-b", CourseUpdate(price=1), image=b"png", blob_host=blob_host)
    assert db.get(Course, "course-b") is None

def test_review_summary_average(db, admin, instructor, make_user, enroll, pay):
    for uid, rating in (("s1", 5), ("s2", 3)):
        s = make_user(uid)
        e = enroll(s, "course-c", start=date(2025, 1, 10))
        pay(e)
        lifecycle.evaluate(db, instructor, e.id, "PASS", feed=None)
        lifecycle.submit_review(db, s, e.id, rating, f"from {uid}", feed=None)

    summary = catalog.course_review_summary(db, "course-c")
    assert summary.count == 2
    assert summary.average == 4.0
    assert {r.comment for r in summary.reviews} == {"from s1", "from s2"}
    assert catalog.course_review_summary(db, "course-a").count == 0
