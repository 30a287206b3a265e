from datetime import datetime, timezone

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from swimschool.db.session import get_db
from swimschool.core.errors import NotAuthenticated
from swimschool.core.tokens import Identity, decode_identity
from swimschool.models.user import UserProfile
from swimschool.services.blob_host import BlobHost, ImgbbBlobHost
from swimschool.services.confirm import ConfirmGate, confirm_gate
from swimschool.services.realtime import ChangeFeed, change_feed
from swimschool.services.users import get_or_create_profile

# ----------------------------------------------------------------------
# Lê o Bearer do header Authorization (token emitido pelo IdP)
# ----------------------------------------------------------------------
def get_bearer_token(authorization: str = Header(None, alias="Authorization")) -> str:
    if not authorization:
        raise NotAuthenticated()
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise NotAuthenticated("Invalid Authorization header.")
    return parts[1]

def get_identity(token: str = Depends(get_bearer_token)) -> Identity:
    identity = decode_identity(token)
    if identity is None:
        raise NotAuthenticated("Your session has expired. Please sign in again.")
    return identity

# ----------------------------------------------------------------------
# Perfil atual; criado na primeira vez que a identidade aparece
# ----------------------------------------------------------------------
def get_current_user(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
) -> UserProfile:
    return get_or_create_profile(db, identity)

# ----------------------------------------------------------------------
# Colaboradores trocáveis nos testes (dependency_overrides)
# ----------------------------------------------------------------------
def get_now() -> datetime:
    return datetime.now(timezone.utc)

def get_blob_host() -> BlobHost:
    return ImgbbBlobHost()

def get_change_feed() -> ChangeFeed:
    return change_feed

def get_confirm_gate() -> ConfirmGate:
    return confirm_gate
