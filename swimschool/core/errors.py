# swimschool/core/errors.py
"""
Exceções de domínio do lifecycle.

Os serviços levantam estas exceções; `swimschool.main` converte cada uma em
JSON no formato {"code", "message", "details"} com o status HTTP da classe.
4xx = problema de permissão/validação, 5xx = problema transitório (store, blob).
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class SwimSchoolError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class ValidationFailed(SwimSchoolError):
    status_code = 422
    code = "VALIDATION_ERROR"


class NotFound(SwimSchoolError):
    status_code = 404
    code = "NOT_FOUND"


class NotAuthenticated(SwimSchoolError):
    status_code = 401
    code = "NOT_AUTHENTICATED"

    def __init__(self, message: str = "Please sign in first."):
        super().__init__(message)


class PermissionDenied(SwimSchoolError):
    status_code = 403
    code = "PERMISSION_DENIED"


class InvalidTransition(SwimSchoolError):
    status_code = 409
    code = "INVALID_TRANSITION"

    def __init__(self, entity: str, current: str, target: str):
        super().__init__(
            f"{entity} cannot move from {current} to {target}.",
            {"entity": entity, "current": current, "target": target},
        )


class ReviewAlreadySubmitted(SwimSchoolError):
    status_code = 409
    code = "REVIEW_EXISTS"

    def __init__(self, enrollment_id: str):
        super().__init__("A review was already submitted for this enrollment.", {"enrollment_id": enrollment_id})


class StoreUnavailable(SwimSchoolError):
    status_code = 503
    code = "STORE_UNAVAILABLE"

    def __init__(self, message: str = "The database is temporarily unreachable. Please try again."):
        super().__init__(message)


class BlobUploadFailed(SwimSchoolError):
    status_code = 502
    code = "BLOB_UPLOAD_FAILED"


class BroadcastIncomplete(SwimSchoolError):
    status_code = 503
    code = "BROADCAST_INCOMPLETE"

    def __init__(self, delivered: int, total: int):
        self.delivered = delivered
        self.total = total
        super().__init__(
            f"Broadcast stopped after {delivered} of {total} notifications.",
            {"delivered": delivered, "total": total},
        )
