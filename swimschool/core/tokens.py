# swimschool/core/tokens.py
"""
Tokens do identity provider externo.

O IdP autentica a pessoa e emite um JWT; aqui só verificamos a assinatura e
extraímos a identidade (sub estável + claims de contato). `issue_identity_token`
existe para ambientes de dev/teste, onde não há IdP real.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt, JWTError
from swimschool.core.config import settings

@dataclass(frozen=True)
class Identity:
    uid: str
    email: str = ""
    display_name_hint: str = ""
    phone_hint: str = ""
    photo_url: str = ""

def _now() -> datetime:
    return datetime.now(timezone.utc)

def issue_identity_token(
    *,
    sub: str,
    email: str = "",
    name: str = "",
    phone_number: str = "",
    picture: str = "",
    expires_minutes: int = 60,
) -> str:
    payload: Dict[str, Any] = {
        "sub": sub,
        "email": email,
        "name": name,
        "phone_number": phone_number,
        "picture": picture,
        "iat": int(_now().timestamp()),
        "exp": int((_now() + timedelta(minutes=expires_minutes)).timestamp()),
    }
    if settings.IDP_AUDIENCE:
        payload["aud"] = settings.IDP_AUDIENCE
    return jwt.encode(payload, settings.IDP_SECRET_KEY, algorithm=settings.IDP_ALGORITHM)

def decode_identity(token: str) -> Optional[Identity]:
    options = {"verify_aud": bool(settings.IDP_AUDIENCE)}
    try:
        payload = jwt.decode(
            token,
            settings.IDP_SECRET_KEY,
            algorithms=[settings.IDP_ALGORITHM],
            audience=settings.IDP_AUDIENCE,
            options=options,
        )
    except JWTError:
        return None
    if not isinstance(payload, dict) or not payload.get("sub"):
        return None
    return Identity(
        uid=str(payload["sub"]),
        email=(payload.get("email") or "").strip().lower(),
        display_name_hint=payload.get("name") or "",
        phone_hint=payload.get("phone_number") or "",
        photo_url=payload.get("picture") or "",
    )
