# swimschool/schemas/enrollment.py
from __future__ import annotations
from datetime import date, datetime
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

PaymentStatusName = Literal["PENDING", "PAID", "REJECTED"]
EvaluationName = Literal["PENDING", "PASS", "FAIL"]

class PersonDetails(BaseModel):
    student_name: str = Field(alias="studentName", min_length=1)
    gender: str = ""
    age: int = Field(default=0, ge=0, le=120)
    weight: str = ""
    height: str = ""
    disease: Optional[str] = None
    adhd_condition: bool = Field(default=False, alias="adhdCondition")
    school: str = ""
    phone: str = ""

    model_config = {"populate_by_name": True}

class EnrollmentCreate(PersonDetails):
    course_id: str = Field(alias="courseId", min_length=1)
    start_date: date = Field(alias="startDate")

class PersonDetailsUpdate(BaseModel):
    student_name: Optional[str] = Field(default=None, alias="studentName", min_length=1)
    gender: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0, le=120)
    weight: Optional[str] = None
    height: Optional[str] = None
    disease: Optional[str] = None
    adhd_condition: Optional[bool] = Field(default=None, alias="adhdCondition")
    school: Optional[str] = None
    phone: Optional[str] = None

    model_config = {"populate_by_name": True}

    # colunas NOT NULL: pode omitir, não pode mandar null
    @field_validator("student_name", "gender", "age", "weight", "height", "adhd_condition", "school", "phone")
    @classmethod
    def _sem_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v

class ReviewOut(BaseModel):
    rating: int
    comment: str
    created_at: datetime = Field(alias="createdAt")

    model_config = {"populate_by_name": True}

class EnrollmentOut(BaseModel):
    id: str
    student_id: str = Field(alias="studentId")
    user_id: str = Field(alias="userId")
    course_id: str = Field(alias="courseId")
    student_name: str = Field(alias="studentName")
    gender: str
    age: int
    weight: str
    height: str
    disease: Optional[str] = None
    adhd_condition: bool = Field(alias="adhdCondition")
    school: str
    phone: str
    start_date: date = Field(alias="startDate")
    expiry_date: Optional[date] = Field(default=None, alias="expiryDate")
    slip_url: str = Field(alias="slipUrl")
    payment_status: PaymentStatusName = Field(alias="paymentStatus")
    attendance: List[datetime] = []
    evaluation: EvaluationName
    review: Optional[ReviewOut] = None
    created_at: datetime = Field(alias="createdAt")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_model(cls, e) -> "EnrollmentOut":
        review = None
        if e.review_rating is not None:
            review = ReviewOut(rating=e.review_rating, comment=e.review_comment or "", created_at=e.review_created_at)
        return cls(
            id=e.id,
            student_id=e.student_id,
            user_id=e.user_id,
            course_id=e.course_id,
            student_name=e.student_name,
            gender=e.gender,
            age=e.age,
            weight=e.weight,
            height=e.height,
            disease=e.disease,
            adhd_condition=e.adhd_condition,
            school=e.school,
            phone=e.phone,
            start_date=e.start_date,
            expiry_date=e.expiry_date,
            slip_url=e.slip_url,
            payment_status=e.payment_status,
            attendance=[a.checked_in_at for a in e.attendance],
            evaluation=e.evaluation,
            review=review,
            created_at=e.created_at,
        )

class PaymentDecisionIn(BaseModel):
    decision: Literal["PAID", "REJECTED"]

class PaymentDecisionOut(BaseModel):
    # "confirm_required": primeiro clique; "applied": segundo clique dentro da janela
    status: Literal["confirm_required", "applied"]
    payment_status: PaymentStatusName = Field(alias="paymentStatus")
    confirm_within_seconds: Optional[float] = Field(default=None, alias="confirmWithinSeconds")

    model_config = {"populate_by_name": True}

class EvaluationIn(BaseModel):
    result: Literal["PASS", "FAIL"]

class ReviewIn(BaseModel):
    rating: int = Field(ge=1, le=5)
    comment: str = ""

class CheckInIn(BaseModel):
    enrollment_ids: List[str] = Field(alias="enrollmentIds", min_length=1)

    model_config = {"populate_by_name": True}

class CheckInOut(BaseModel):
    checked_in: List[str] = Field(alias="checkedIn")
    skipped: Dict[str, str] = {}
    failed: Dict[str, str] = {}

    model_config = {"populate_by_name": True}

class ProgressOut(BaseModel):
    enrollment_id: str = Field(alias="enrollmentId")
    attended: int
    sessions: int
    percent: float

    model_config = {"populate_by_name": True}
