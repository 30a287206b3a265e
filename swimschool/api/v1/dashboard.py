# swimschool/api/v1/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from swimschool.api.deps import get_db
from swimschool.core.rbac import require_roles, ROLE_ADMIN
from swimschool.models.user import UserProfile
from swimschool.schemas.dashboard import DashboardStats
from swimschool.services.dashboard import dashboard_stats

router = APIRouter()

@router.get("/stats", response_model=DashboardStats, response_model_by_alias=True)
def read_stats(
    db: Session = Depends(get_db),
    _admin: UserProfile = Depends(require_roles(ROLE_ADMIN)),
):
    return dashboard_stats(db)
