import functools

import structlog
from sqlalchemy.orm import Session

from taskhub.auth.passwords import hash_password, verify_password
from taskhub.auth.tokens import issue_access_token
from taskhub.config import settings
from taskhub.errors import Conflict, NotFound, Unauthenticated
from taskhub.models.enums import Role
from taskhub.operations.boundary import operation
from taskhub.repositories.orgs import OrganizationRepository
from taskhub.repositories.users import ADMIN_EXISTS, EMAIL_IN_USE, UserRepository, normalize_email
from taskhub.schemas.auth import LoginIn, RegisterIn
from taskhub.schemas.envelope import LoginResult
from taskhub.schemas.users import UserEnvelope, UserOut

logger = structlog.get_logger()

INVALID_CREDENTIALS = "Invalid email or password"

@functools.lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("taskhub-timing-equalizer")

@operation(UserEnvelope, "Error registering user")
def register(db: Session, payload: RegisterIn) -> UserEnvelope:
    """Create a user inside an existing organization.

    Checks run in a fixed order so a failed precondition never leaves a
    partial user behind: organization exists, then the single-admin rule,
    then email uniqueness, and only then the password hash and insert.
    """
    org = OrganizationRepository(db).find_by_id(payload.organization_id)
    if org is None:
        raise NotFound("Organization not found")

    users = UserRepository(db)
    role = payload.role or Role.user
    if role == Role.admin and users.find_admin() is not None:
        raise Conflict(ADMIN_EXISTS)

    email = normalize_email(payload.email)
    if users.find_by_email(email) is not None:
        raise Conflict(EMAIL_IN_USE)

    user = users.create(
        name=payload.name,
        email=email,
        password_hash=hash_password(payload.password),
        role=role,
        organization_id=org.id,
    )
    db.commit()

    logger.info("user_registered", user_id=str(user.id), organization_id=str(org.id), role=role.value)
    return UserEnvelope(success=True, message="User registered successfully", data=UserOut.model_validate(user))

@operation(LoginResult, "Error logging in")
def login(db: Session, payload: LoginIn) -> LoginResult:
    """Verify credentials and issue a bearer token.

    By default unknown emails and wrong passwords get distinct messages.
    With ``unify_login_errors`` both read "Invalid email or password" and an
    unknown email still pays for one bcrypt check.
    """
    user = UserRepository(db).find_by_email(payload.email)
    if user is None:
        logger.info("login_failed", reason="unknown_email")
        if settings.unify_login_errors:
            verify_password(payload.password, _dummy_hash())
            raise Unauthenticated(INVALID_CREDENTIALS)
        raise NotFound("User not found")

    if not verify_password(payload.password, user.password_hash):
        logger.info("login_failed", reason="bad_password", user_id=str(user.id))
        raise Unauthenticated(INVALID_CREDENTIALS if settings.unify_login_errors else "Invalid password")

    token = issue_access_token(user.id, user.role, user.organization_id)
    logger.info("login_succeeded", user_id=str(user.id))
    return LoginResult(success=True, message="Login successful", token=token)
