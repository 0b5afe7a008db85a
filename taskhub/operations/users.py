import uuid

import structlog
from sqlalchemy.orm import Session

from taskhub.auth.tokens import Actor
from taskhub.config import settings
from taskhub.errors import Conflict, NotFound, ValidationFailed
from taskhub.models.enums import Role
from taskhub.operations.boundary import operation
from taskhub.rbac.guard import require_perm
from taskhub.repositories.users import ADMIN_EXISTS, EMAIL_IN_USE, UserRepository, normalize_email
from taskhub.schemas.envelope import Result
from taskhub.schemas.users import UserEnvelope, UserListEnvelope, UserOut, UserUpdateIn

logger = structlog.get_logger()

USER_NOT_FOUND = "User not found"

@operation(UserListEnvelope, "Error fetching users", list_data=True)
def get_users(db: Session, actor: Actor) -> UserListEnvelope:
    require_perm(actor, "users:list")
    users = UserRepository(db).find_many(organization_id=actor.organization_id)
    return UserListEnvelope(
        success=True,
        message="Users fetched successfully",
        data=[UserOut.model_validate(u) for u in users],
    )

@operation(UserEnvelope, "Error fetching user")
def get_user(db: Session, actor: Actor, user_id: uuid.UUID) -> UserEnvelope:
    require_perm(actor, "users:read")
    user = UserRepository(db).find_by_id(user_id)
    if user is None:
        raise NotFound(USER_NOT_FOUND)
    if settings.scope_single_reads_to_org and user.organization_id != actor.organization_id:
        raise NotFound(USER_NOT_FOUND)
    return UserEnvelope(success=True, message="User fetched successfully", data=UserOut.model_validate(user))

@operation(UserEnvelope, "Error updating user")
def update_user(db: Session, actor: Actor, user_id: uuid.UUID, payload: UserUpdateIn) -> UserEnvelope:
    require_perm(actor, "users:update")

    changes = payload.model_dump(exclude_unset=True)
    for field, value in changes.items():
        if value is None:
            raise ValidationFailed(f"{field} cannot be null")

    users = UserRepository(db)
    if users.find_by_id(user_id) is None:
        raise NotFound(USER_NOT_FOUND)

    # promoting the current admin again is a no-op, not a conflict
    if changes.get("role") == Role.admin and users.find_admin(exclude_id=user_id) is not None:
        raise Conflict(ADMIN_EXISTS)

    if "email" in changes:
        changes["email"] = normalize_email(changes["email"])
        holder = users.find_by_email(changes["email"])
        if holder is not None and holder.id != user_id:
            raise Conflict(EMAIL_IN_USE)

    user = users.update(user_id, changes)
    if user is None:
        raise NotFound(USER_NOT_FOUND)
    db.commit()

    logger.info("user_updated", user_id=str(user_id), fields=sorted(changes), actor_id=str(actor.user_id))
    return UserEnvelope(success=True, message="User updated successfully", data=UserOut.model_validate(user))

@operation(Result, "Error deleting user")
def delete_user(db: Session, actor: Actor, user_id: uuid.UUID) -> Result:
    require_perm(actor, "users:delete")
    if not UserRepository(db).delete(user_id):
        raise NotFound(USER_NOT_FOUND)
    db.commit()

    logger.info("user_deleted", user_id=str(user_id), actor_id=str(actor.user_id))
    return Result(success=True, message="User deleted successfully")
