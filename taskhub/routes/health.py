from fastapi import APIRouter
from fastapi.responses import JSONResponse

from taskhub.config import settings
from taskhub.db import db_ping
from taskhub.redis_client import redis_ping

router = APIRouter(tags=["health"])

@router.get("/health")
def health() -> dict:
    return {"status": "ok", "env": settings.app_env}

# readiness: the database is required, redis only backs rate limiting
@router.get("/ready")
def ready() -> JSONResponse:
    checks = {"db": db_ping()}
    if settings.rate_limit_enabled:
        checks["redis"] = redis_ping()

    ok = checks["db"]
    body = {"status": "ok" if ok else "unready", "checks": checks}
    return JSONResponse(status_code=200 if ok else 503, content=body)
