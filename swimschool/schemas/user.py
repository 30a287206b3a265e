# swimschool/schemas/user.py
from __future__ import annotations
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

RoleName = Literal["ADMIN", "INSTRUCTOR", "STUDENT"]

class UserOut(BaseModel):
    uid: str
    email: str          # str (não EmailStr): vem do IdP como está
    display_name: str = Field(alias="displayName")
    photo_url: Optional[str] = Field(default=None, alias="photoURL")
    role: RoleName
    phone: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = Field(default=None, alias="emergencyContact")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_model(cls, u) -> "UserOut":
        return cls(
            uid=u.uid,
            email=u.email or "",
            display_name=u.display_name,
            photo_url=u.photo_url,
            role=u.role,
            phone=u.phone,
            address=u.address,
            emergency_contact=u.emergency_contact,
        )

class RoleUpdate(BaseModel):
    role: RoleName

class ProfileUpdate(BaseModel):
    display_name: Optional[str] = Field(default=None, alias="displayName", min_length=1)
    phone: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = Field(default=None, alias="emergencyContact")

    model_config = {"populate_by_name": True}

    @field_validator("display_name")
    @classmethod
    def _nome_sem_null(cls, v):
        if v is None:
            raise ValueError("displayName must not be null")
        return v
