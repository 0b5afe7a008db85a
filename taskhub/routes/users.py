import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskhub.auth.deps import get_actor
from taskhub.auth.tokens import Actor
from taskhub.db import get_db
from taskhub.operations import users as ops
from taskhub.schemas.envelope import Result
from taskhub.schemas.users import UserEnvelope, UserListEnvelope, UserUpdateIn

router = APIRouter(prefix="/users", tags=["users"])

@router.get("", response_model=UserListEnvelope)
def list_users(
    actor: Actor = Depends(get_actor),
    db: Session = Depends(get_db),
) -> UserListEnvelope:
    return ops.get_users(db, actor)

@router.get("/{user_id}", response_model=UserEnvelope)
def get_user(
    user_id: uuid.UUID,
    actor: Actor = Depends(get_actor),
    db: Session = Depends(get_db),
) -> UserEnvelope:
    return ops.get_user(db, actor, user_id)

@router.patch("/{user_id}", response_model=UserEnvelope)
def update_user(
    user_id: uuid.UUID,
    payload: UserUpdateIn,
    actor: Actor = Depends(get_actor),
    db: Session = Depends(get_db),
) -> UserEnvelope:
    return ops.update_user(db, actor, user_id, payload)

@router.delete("/{user_id}", response_model=Result)
def delete_user(
    user_id: uuid.UUID,
    actor: Actor = Depends(get_actor),
    db: Session = Depends(get_db),
) -> Result:
    return ops.delete_user(db, actor, user_id)
