# swimschool/core/config.py
import os
from typing import ClassVar, Dict
from pydantic import BaseModel, Field

def _default_database_url() -> str:
    if os.getenv("DATABASE_URL"):
        return os.environ["DATABASE_URL"]
    data_dir = os.path.abspath(os.getenv("DATA_DIR", "./data"))
    os.makedirs(data_dir, exist_ok=True)
    return f"sqlite:///{os.path.join(data_dir, 'swimschool.db')}"

def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}

def parse_role_allowlist(raw: str) -> Dict[str, str]:
    """'a@x=ADMIN,b@x=INSTRUCTOR' -> {'a@x': 'ADMIN', 'b@x': 'INSTRUCTOR'}"""
    table: Dict[str, str] = {}
    for item in (raw or "").split(","):
        if "=" not in item:
            continue
        email, role = item.split("=", 1)
        email, role = email.strip().lower(), role.strip().upper()
        if email and role:
            table[email] = role
    return table

class Settings(BaseModel):
    # Constante (não vira campo Pydantic)
    DATA_DIR: ClassVar[str] = os.path.abspath(os.getenv("DATA_DIR", "./data"))

    DATABASE_URL: str = Field(default_factory=_default_database_url)
    RUN_MIGRATIONS_ON_STARTUP: bool = Field(default_factory=lambda: _env_bool("RUN_MIGRATIONS_ON_STARTUP"))

    # identity provider (JWT emitido pelo IdP externo)
    IDP_SECRET_KEY: str = Field(default_factory=lambda: os.getenv("IDP_SECRET_KEY", "CHANGE_ME_IDP_SECRET"))
    IDP_ALGORITHM: str = Field(default_factory=lambda: os.getenv("IDP_ALGORITHM", "HS256"))
    IDP_AUDIENCE: str | None = Field(default_factory=lambda: os.getenv("IDP_AUDIENCE") or None)
    ROLE_ALLOWLIST: Dict[str, str] = Field(default_factory=lambda: parse_role_allowlist(
        os.getenv("ROLE_ALLOWLIST", "admin@example.com=ADMIN,instructor@example.com=INSTRUCTOR")
    ))

    # blob host
    IMGBB_API_KEY: str = Field(default_factory=lambda: os.getenv("IMGBB_API_KEY", ""))
    IMGBB_UPLOAD_URL: str = Field(default_factory=lambda: os.getenv("IMGBB_UPLOAD_URL", "https://api.imgbb.com/1/upload"))
    BLOB_UPLOAD_TIMEOUT_SECONDS: float = Field(default_factory=lambda: float(os.getenv("BLOB_UPLOAD_TIMEOUT_SECONDS", "30")))

    # lifecycle
    PAYMENT_CONFIRM_WINDOW_SECONDS: float = Field(default_factory=lambda: float(os.getenv("PAYMENT_CONFIRM_WINDOW_SECONDS", "3")))
    BROADCAST_BATCH_SIZE: int = Field(default_factory=lambda: int(os.getenv("BROADCAST_BATCH_SIZE", "500")))
    EXPIRY_ALERT_DAYS: int = Field(default_factory=lambda: int(os.getenv("EXPIRY_ALERT_DAYS", "30")))
    NORMAL_COURSE_VALIDITY_MONTHS: int = Field(default_factory=lambda: int(os.getenv("NORMAL_COURSE_VALIDITY_MONTHS", "3")))
    TIMEZONE: str = Field(default_factory=lambda: os.getenv("TIMEZONE", "Asia/Bangkok"))

    # logging
    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    LOG_JSON: bool = Field(default_factory=lambda: _env_bool("LOG_JSON"))

settings = Settings()
