# swimschool/services/catalog.py
"""
Catálogo de cursos.

O catálogo padrão é estático; registros salvos na tabela `courses` com o mesmo
id sobrepõem campo a campo (o que está salvo vence, o padrão preenche o resto)
e registros que só existem no banco entram no fim da lista.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from swimschool.crud.enrollment import enrollment_crud
from swimschool.models.course import Course
from swimschool.schemas.course import CourseOut, CourseReview, CourseReviewSummary, CourseUpdate
from swimschool.services.blob_host import BlobHost

logger = logging.getLogger(__name__)

DEFAULT_COURSES: List[Dict[str, Any]] = [
    {
        "id": "course-a",
        "title": "Course A (4-6 years, group)",
        "age_group": "4-6 years",
        "type": "Normal",
        "sessions": 20,
        "price": 3000,
        "time_slot": "16:30 - 19:00",
        "description": "20 one-hour lessons, classes every day, pick the days that suit you.",
        "capacity": 20,
        "image_url": "https://pic.in.th/image/CourseA.jXMt4x",
        "is_open": True,
        "terms": "Missed lessons (illness or parent unavailable) are not deducted.",
        "instructor_name": "Kru Fluke",
    },
    {
        "id": "course-b",
        "title": "Course B (4-6 years, private)",
        "age_group": "4-6 years",
        "type": "Private",
        "sessions": 10,
        "price": 4000,
        "time_slot": "10:00 - 20:30 (closed Sundays)",
        "description": "10 one-hour one-to-one lessons, choose your own time.",
        "capacity": 5,
        "image_url": "https://pic.in.th/image/CourseB.jXMC3y",
        "is_open": True,
        "terms": "Missed lessons due to illness are not deducted.",
        "instructor_name": "Kru Som",
    },
    {
        "id": "course-c",
        "title": "Course C (7+ years, group)",
        "age_group": "7+ years",
        "type": "Normal",
        "sessions": 20,
        "price": 2500,
        "time_slot": "16:30 - 19:00",
        "description": "20 one-hour lessons, from basic to advanced skills.",
        "capacity": 25,
        "image_url": "https://pic.in.th/image/CourseC.jXMGUC",
        "is_open": True,
        "terms": "Missed lessons due to illness are not deducted.",
        "instructor_name": "Kru Fluke",
    },
    {
        "id": "course-d",
        "title": "Course D (7+ years, private)",
        "age_group": "7+ years",
        "type": "Private",
        "sessions": 10,
        "price": 3500,
        "time_slot": "10:00 - 20:30 (closed Sundays)",
        "description": "10 one-hour lessons in groups of three.",
        "capacity": 15,
        "image_url": "https://pic.in.th/image/CourseD.jXMe2H",
        "is_open": True,
        "terms": "Missed lessons due to illness are not deducted.",
        "instructor_name": "Kru Ball",
    },
    {
        "id": "baby-course",
        "title": "BABY SWIMMING COURSE",
        "age_group": "Toddlers",
        "type": "Baby",
        "sessions": 10,
        "price": 4500,
        "time_slot": "09:00 - 15:00 (closed Sundays)",
        "description": "10 one-hour lessons to get comfortable in the water.",
        "capacity": 10,
        "image_url": "https://pic.in.th/image/CourseBabyswimming.jXM1jh",
        "is_open": True,
        "terms": "Missed lessons due to illness are not deducted.",
        "instructor_name": "Kru Som",
    },
]

_COURSE_FIELDS = [
    "title", "age_group", "type", "sessions", "price", "time_slot", "description",
    "capacity", "image_url", "is_open", "terms", "instructor_name", "pool_location",
]

def _stored_fields(row: Course) -> Dict[str, Any]:
    return {f: getattr(row, f) for f in _COURSE_FIELDS if getattr(row, f) is not None}

def merge_courses(defaults: List[Dict[str, Any]], stored: List[Course]) -> List[CourseOut]:
    by_id = {row.id: row for row in stored}
    merged: List[CourseOut] = []
    for base in defaults:
        data = dict(base)
        row = by_id.pop(base["id"], None)
        if row is not None:
            data.update(_stored_fields(row))
        merged.append(CourseOut(**data))
    for row in stored:
        if row.id in by_id:
            data = _stored_fields(row)
            data.setdefault("title", row.id)
            merged.append(CourseOut(id=row.id, **data))
    return merged

def list_courses(db: Session) -> List[CourseOut]:
    stored = list(db.scalars(select(Course).order_by(Course.id)).all())
    return merge_courses(DEFAULT_COURSES, stored)

def get_course(db: Session, course_id: str) -> Optional[CourseOut]:
    for course in list_courses(db):
        if course.id == course_id:
            return course
    return None

def courses_by_id(db: Session) -> Dict[str, CourseOut]:
    return {c.id: c for c in list_courses(db)}

def save_course(
    db: Session,
    course_id: str,
    changes: CourseUpdate,
    *,
    image: Optional[bytes] = None,
    image_filename: str = "course.png",
    blob_host: Optional[BlobHost] = None,
) -> CourseOut:
    """Upsert com merge. A imagem sobe antes; se o upload falhar nada é gravado."""
    data = changes.model_dump(exclude_unset=True)
    if image:
        if blob_host is None:
            raise RuntimeError("blob_host is required to upload a course image")
        data["image_url"] = blob_host.upload(image, image_filename)

    row = db.get(Course, course_id)
    if row is None:
        row = Course(id=course_id)
        db.add(row)
    for field, value in data.items():
        setattr(row, field, value)
    db.commit()
    logger.info("Course %s saved (%s)", course_id, ", ".join(sorted(data)) or "no changes")

    course = get_course(db, course_id)
    assert course is not None
    return course

def course_review_summary(db: Session, course_id: str) -> CourseReviewSummary:
    rows = enrollment_crud.list_reviewed_for_course(db, course_id)
    reviews = [
        CourseReview(
            student_name=e.student_name,
            rating=e.review_rating,
            comment=e.review_comment or "",
            date=e.review_created_at,
        )
        for e in rows
    ]
    average = sum(r.rating for r in reviews) / len(reviews) if reviews else 0.0
    return CourseReviewSummary(course_id=course_id, average=average, count=len(reviews), reviews=reviews)
