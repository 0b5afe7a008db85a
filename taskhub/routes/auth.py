from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskhub.config import settings
from taskhub.db import get_db
from taskhub.operations import auth as ops
from taskhub.ratelimit import rate_limit
from taskhub.schemas.auth import LoginIn, RegisterIn
from taskhub.schemas.envelope import LoginResult
from taskhub.schemas.users import UserEnvelope

# the only routes reachable without a bearer token
router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=UserEnvelope)
def register(
    payload: RegisterIn,
    db: Session = Depends(get_db),
    _: None = Depends(
        rate_limit(
            "auth:register",
            limit_per_window=settings.rate_limit_register_per_min,
            window_seconds=60,
        )
    ),
) -> UserEnvelope:
    return ops.register(db, payload)

@router.post("/login", response_model=LoginResult)
def login(
    payload: LoginIn,
    db: Session = Depends(get_db),
    _: None = Depends(
        rate_limit(
            "auth:login",
            limit_per_window=settings.rate_limit_login_per_min,
            window_seconds=60,
        )
    ),
) -> LoginResult:
    return ops.login(db, payload)
