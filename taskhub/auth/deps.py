from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from taskhub.auth.tokens import Actor, decode_access_token
from taskhub.db import get_db
from taskhub.errors import Unauthenticated
from taskhub.models.user import User

bearer = HTTPBearer(auto_error=False)

def get_actor(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> Actor:
    if creds is None or creds.scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail="missing bearer token")

    try:
        claims = decode_access_token(creds.credentials)
    except Unauthenticated as e:
        raise HTTPException(status_code=401, detail=e.message)

    user = db.get(User, claims.user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="user not found")

    # role and organization can change after the token was issued
    return Actor(user_id=user.id, role=user.role, organization_id=user.organization_id)
