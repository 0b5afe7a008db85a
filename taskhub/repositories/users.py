import uuid

from sqlalchemy import select

from taskhub.errors import Conflict
from taskhub.models.enums import Role
from taskhub.models.user import ADMIN_INDEX_NAME, User
from taskhub.repositories.base import Repository

ADMIN_EXISTS = "An admin already exists"
EMAIL_IN_USE = "Email already in use"

def normalize_email(email: str) -> str:
    return email.strip().lower()

class UserRepository(Repository[User]):
    model = User
    label = "User"
    required_fields = ("name", "email", "password_hash", "role", "organization_id")
    mutable_fields = frozenset({"name", "email", "role"})

    def find_by_email(self, email: str) -> User | None:
        return self.db.scalar(select(User).where(User.email == normalize_email(email)))

    def find_admin(self, exclude_id: uuid.UUID | None = None) -> User | None:
        q = select(User).where(User.role == Role.admin)
        if exclude_id is not None:
            q = q.where(User.id != exclude_id)
        return self.db.scalar(q.limit(1))

    def conflict_for(self, detail: str) -> Conflict:
        # postgres names the index, sqlite names the column
        if ADMIN_INDEX_NAME in detail or "users.role" in detail:
            return Conflict(ADMIN_EXISTS)
        if "email" in detail:
            return Conflict(EMAIL_IN_USE)
        return super().conflict_for(detail)
