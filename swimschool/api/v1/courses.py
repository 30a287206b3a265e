# swimschool/api/v1/courses.py
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from swimschool.api.deps import get_db, get_blob_host
from swimschool.core.errors import NotFound
from swimschool.core.rbac import require_roles, ROLE_ADMIN
from swimschool.models.user import UserProfile
from swimschool.schemas.course import CourseOut, CourseReviewSummary, CourseUpdate
from swimschool.services import catalog
from swimschool.services.blob_host import BlobHost

router = APIRouter()

@router.get("/", response_model=List[CourseOut], response_model_by_alias=True)
def list_courses(db: Session = Depends(get_db)):
    return catalog.list_courses(db)

@router.get("/{course_id}", response_model=CourseOut, response_model_by_alias=True)
def read_course(course_id: str, db: Session = Depends(get_db)):
    course = catalog.get_course(db, course_id)
    if course is None:
        raise NotFound("Course not found.", {"id": course_id})
    return course

@router.get("/{course_id}/reviews", response_model=CourseReviewSummary, response_model_by_alias=True)
def course_reviews(course_id: str, db: Session = Depends(get_db)):
    return catalog.course_review_summary(db, course_id)

# multipart: `data` = JSON parcial do curso, `image` = nova foto (opcional)
@router.put("/{course_id}", response_model=CourseOut, response_model_by_alias=True)
def save_course(
    course_id: str,
    data: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    blob_host: BlobHost = Depends(get_blob_host),
    _admin: UserProfile = Depends(require_roles(ROLE_ADMIN)),
):
    changes = CourseUpdate.model_validate_json(data) if data else CourseUpdate()
    content = image.file.read() if image is not None else None
    return catalog.save_course(
        db,
        course_id,
        changes,
        image=content,
        image_filename=(image.filename if image is not None else None) or "course.png",
        blob_host=blob_host,
    )
