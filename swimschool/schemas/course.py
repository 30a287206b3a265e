# swimschool/schemas/course.py
from __future__ import annotations
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

CourseTypeName = Literal["Normal", "Private", "Baby"]

class CourseOut(BaseModel):
    id: str
    title: str
    age_group: str = Field(default="", alias="ageGroup")
    type: CourseTypeName = "Normal"
    sessions: int = 20
    price: int = 0
    time_slot: str = Field(default="", alias="timeSlot")
    description: str = ""
    capacity: int = 0
    image_url: str = Field(default="", alias="imageUrl")
    is_open: bool = Field(default=True, alias="isOpen")
    terms: str = ""
    instructor_name: Optional[str] = Field(default=None, alias="instructorName")
    pool_location: Optional[str] = Field(default=None, alias="poolLocation")

    model_config = {"populate_by_name": True}

class CourseUpdate(BaseModel):
    """Edição parcial (merge); só os campos enviados são gravados."""
    title: Optional[str] = None
    age_group: Optional[str] = Field(default=None, alias="ageGroup")
    type: Optional[CourseTypeName] = None
    sessions: Optional[int] = Field(default=None, ge=1)
    price: Optional[int] = Field(default=None, ge=0)
    time_slot: Optional[str] = Field(default=None, alias="timeSlot")
    description: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    is_open: Optional[bool] = Field(default=None, alias="isOpen")
    terms: Optional[str] = None
    instructor_name: Optional[str] = Field(default=None, alias="instructorName")
    pool_location: Optional[str] = Field(default=None, alias="poolLocation")

    model_config = {"populate_by_name": True}

class CourseReview(BaseModel):
    student_name: str = Field(alias="studentName")
    rating: int
    comment: str
    date: datetime

    model_config = {"populate_by_name": True}

class CourseReviewSummary(BaseModel):
    course_id: str = Field(alias="courseId")
    average: float
    count: int
    reviews: List[CourseReview] = []

    model_config = {"populate_by_name": True}
