# swimschool/api/v1/users.py
from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from swimschool.api.deps import get_db, get_current_user
from swimschool.core.rbac import require_roles, ROLE_ADMIN
from swimschool.models.user import UserProfile
from swimschool.schemas.user import ProfileUpdate, RoleUpdate, UserOut
from swimschool.services import users as users_service

router = APIRouter()

# --------------------------- perfil próprio ---------------------------

@router.get("/me", response_model=UserOut, response_model_by_alias=True)
def read_me(user: UserProfile = Depends(get_current_user)):
    return UserOut.from_model(user)

@router.patch("/me", response_model=UserOut, response_model_by_alias=True)
def update_me(
    body: ProfileUpdate,
    db: Session = Depends(get_db),
    user: UserProfile = Depends(get_current_user),
):
    return UserOut.from_model(users_service.update_profile(db, user, body))

# --------------------------- admin ---------------------------

@router.get("/users", response_model=List[UserOut], response_model_by_alias=True)
def list_users(
    db: Session = Depends(get_db),
    _admin: UserProfile = Depends(require_roles(ROLE_ADMIN)),
):
    return [UserOut.from_model(u) for u in users_service.list_users(db)]

@router.patch("/users/{uid}/role", response_model=UserOut, response_model_by_alias=True)
def change_role(
    body: RoleUpdate,
    uid: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
    _admin: UserProfile = Depends(require_roles(ROLE_ADMIN)),
):
    return UserOut.from_model(users_service.change_role(db, uid, body.role))
