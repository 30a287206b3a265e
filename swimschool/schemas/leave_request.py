# swimschool/schemas/leave_request.py
from __future__ import annotations
from datetime import date, datetime
from typing import Literal
from pydantic import BaseModel, Field

class LeaveRequestCreate(BaseModel):
    enrollment_id: str = Field(alias="enrollmentId", min_length=1)
    leave_date: date = Field(alias="leaveDate")
    reason: str = Field(min_length=1)

    model_config = {"populate_by_name": True}

class LeaveDecisionIn(BaseModel):
    decision: Literal["APPROVED", "REJECTED"]

class LeaveRequestOut(BaseModel):
    id: str
    user_id: str = Field(alias="userId")
    student_name: str = Field(alias="studentName")
    enrollment_id: str = Field(alias="enrollmentId")
    course_name: str = Field(alias="courseName")
    leave_date: date = Field(alias="leaveDate")
    reason: str
    status: Literal["PENDING", "APPROVED", "REJECTED"]
    created_at: datetime = Field(alias="createdAt")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_model(cls, r) -> "LeaveRequestOut":
        return cls(
            id=r.id,
            user_id=r.user_id,
            student_name=r.student_name,
            enrollment_id=r.enrollment_id,
            course_name=r.course_name,
            leave_date=r.leave_date,
            reason=r.reason,
            status=r.status,
            created_at=r.created_at,
        )
