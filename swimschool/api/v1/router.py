# swimschool/api/v1/router.py
from fastapi import APIRouter
from swimschool.api.v1 import (
    users,
    courses,
    enrollments,
    leave_requests,
    notifications,
    dashboard,
)

api_router = APIRouter()

# -------- perfil e usuários (/me, /users) --------
api_router.include_router(users.router, tags=["users"])

# -------- catálogo (público para leitura) --------
api_router.include_router(courses.router, prefix="/courses", tags=["courses"])

# -------- ciclo de vida da inscrição --------
api_router.include_router(enrollments.router,    prefix="/enrollments",    tags=["enrollments"])
api_router.include_router(leave_requests.router, prefix="/leave-requests", tags=["leave-requests"])
api_router.include_router(notifications.router,  prefix="/notifications",  tags=["notifications"])
api_router.include_router(dashboard.router,      prefix="/dashboard",      tags=["dashboard"])
