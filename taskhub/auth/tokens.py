import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from taskhub.config import settings
from taskhub.errors import Unauthenticated
from taskhub.models.enums import Role

@dataclass(frozen=True)
class Actor:
    user_id: uuid.UUID
    role: Role
    organization_id: uuid.UUID

def now_utc() -> datetime:
    return datetime.now(timezone.utc)

def issue_access_token(
    user_id: str | uuid.UUID,
    role: Role | str,
    organization_id: str | uuid.UUID,
) -> str:
    iat = now_utc()
    exp = iat + timedelta(minutes=settings.jwt_expires_minutes)
    payload = {
        "sub": str(user_id),
        "role": Role(role).value,
        "org_id": str(organization_id),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": int(iat.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm="HS256")

def decode_access_token(token: str) -> Actor:
    # fail closed: anything short of a fully valid token is rejected
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=["HS256"],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options={"require": ["sub", "role", "org_id", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise Unauthenticated("token expired") from None
    except jwt.InvalidTokenError:
        raise Unauthenticated("invalid token") from None

    try:
        return Actor(
            user_id=uuid.UUID(str(payload["sub"])),
            role=Role(payload["role"]),
            organization_id=uuid.UUID(str(payload["org_id"])),
        )
    except (KeyError, ValueError):
        raise Unauthenticated("invalid token") from None
