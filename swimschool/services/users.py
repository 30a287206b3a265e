# swimschool/services/users.py
"""
Perfis de usuário.

O perfil nasce na primeira vez que uma identidade do IdP aparece; o papel vem
da allow-list de e-mails da configuração nesse momento e nunca mais é
recalculado. Depois disso só um admin muda o papel.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from swimschool.core.config import settings
from swimschool.core.tokens import Identity
from swimschool.crud.user import user_crud
from swimschool.models.user import UserProfile, UserRole
from swimschool.schemas.user import ProfileUpdate

logger = logging.getLogger(__name__)

def initial_role(email: str, allowlist: Optional[Dict[str, str]] = None) -> str:
    table = settings.ROLE_ALLOWLIST if allowlist is None else allowlist
    role = table.get((email or "").strip().lower())
    if role in UserRole.__members__:
        return role
    return UserRole.STUDENT.value

def _display_name(identity: Identity) -> str:
    if identity.display_name_hint:
        return identity.display_name_hint
    if identity.email:
        return identity.email.split("@")[0]
    return "User"

def get_or_create_profile(db: Session, identity: Identity, allowlist: Optional[Dict[str, str]] = None) -> UserProfile:
    user = user_crud.get(db, identity.uid)
    if user is not None:
        return user

    user = UserProfile(
        uid=identity.uid,
        email=identity.email,
        display_name=_display_name(identity),
        photo_url=identity.photo_url or None,
        role=initial_role(identity.email, allowlist),
        phone=identity.phone_hint or None,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # primeira requisição concorrente do mesmo uid: o outro perfil vale
        db.rollback()
        return user_crud.get_or_404(db, identity.uid)
    db.refresh(user)
    logger.info("Created profile %s with role %s", user.uid, user.role)
    return user

def update_profile(db: Session, user: UserProfile, changes: ProfileUpdate) -> UserProfile:
    return user_crud.update(db, user, changes.model_dump(exclude_unset=True))

def change_role(db: Session, uid: str, role: str) -> UserProfile:
    user = user_crud.get_or_404(db, uid)
    previous = user.role
    user = user_crud.update(db, user, {"role": role})
    logger.info("Role of %s changed from %s to %s", uid, previous, role)
    return user

def list_users(db: Session) -> List[UserProfile]:
    return user_crud.list_all(db)
