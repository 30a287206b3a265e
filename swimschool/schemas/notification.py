# swimschool/schemas/notification.py
from __future__ import annotations
from datetime import datetime
from typing import List, Literal
from pydantic import BaseModel, Field

NotificationTypeName = Literal["PAYMENT", "EVALUATION", "SYSTEM", "EXPIRY", "NEW_ENROLLMENT", "LEAVE"]
AudienceName = Literal["ALL", "STUDENT", "INSTRUCTOR"]

class NotificationOut(BaseModel):
    id: str
    user_id: str = Field(alias="userId")
    title: str
    message: str
    type: NotificationTypeName
    read: bool
    date: datetime

    model_config = {"populate_by_name": True}

    @classmethod
    def from_model(cls, n) -> "NotificationOut":
        return cls(id=n.id, user_id=n.user_id, title=n.title, message=n.message, type=n.type, read=n.read, date=n.date)

class MarkReadIn(BaseModel):
    ids: List[str] = Field(min_length=1)

class MarkReadOut(BaseModel):
    updated: int

class BroadcastIn(BaseModel):
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    audience: AudienceName = "ALL"

class BroadcastOut(BaseModel):
    delivered: int

class ExpirySweepOut(BaseModel):
    sent: int
