import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from pydantic import ValidationError
from sqlalchemy.exc import DBAPIError, IntegrityError
from starlette.requests import Request

from swimschool.api.v1.router import api_router
from swimschool.core.config import settings
from swimschool.core.errors import StoreUnavailable, SwimSchoolError
from swimschool.core.logging import setup_logging
from swimschool.db.bootstrap import run_migrations

setup_logging()
logger = logging.getLogger(__name__)

api = FastAPI(
    title="Swim School - Enrollment Backend",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    swagger_ui_parameters={"displayRequestDuration": True, "persistAuthorization": True},
)

api.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # ajuste para domínios específicos em produção
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# métricas /metrics (Prometheus)
Instrumentator().instrument(api).expose(api, include_in_schema=False, should_gzip=True)

api.include_router(api_router, prefix="/api/v1")

@api.get("/healthz", tags=["health"])
def healthz():
    return {"status": "ok"}

@api.on_event("startup")
def startup():
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        run_migrations()

# ----------------------------------------------------------------------
# Erros -> {"code", "message", "details"}
# ----------------------------------------------------------------------
@api.exception_handler(SwimSchoolError)
def handle_domain_error(request: Request, exc: SwimSchoolError):
    if exc.status_code >= 500:
        logger.warning("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))

@api.exception_handler(RequestValidationError)
def handle_request_validation(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"code": "VALIDATION_ERROR", "message": "Invalid request.", "details": jsonable_encoder(exc.errors())},
    )

# corpo JSON dentro de multipart (campo `data`) validado no endpoint
@api.exception_handler(ValidationError)
def handle_model_validation(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Invalid request.",
            "details": jsonable_encoder(exc.errors(include_url=False, include_context=False)),
        },
    )

@api.exception_handler(IntegrityError)
def handle_integrity_error(request: Request, exc: IntegrityError):
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, getattr(exc, "orig", exc))
    return JSONResponse(
        status_code=409,
        content={
            "code": "CONSTRAINT_VIOLATION",
            "message": "The request conflicts with a database constraint.",
            "details": str(getattr(exc, "orig", exc)),
        },
    )

@api.exception_handler(DBAPIError)
def handle_store_error(request: Request, exc: DBAPIError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    err = StoreUnavailable()
    return JSONResponse(status_code=err.status_code, content=err.to_dict())

@api.exception_handler(Exception)
def handle_unexpected(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"code": "INTERNAL_ERROR", "message": "Internal error.", "details": str(exc)},
    )
