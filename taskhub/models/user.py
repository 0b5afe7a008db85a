from datetime import datetime
from uuid import UUID, uuid4

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskhub.models.base import Base
from taskhub.models.enums import Role
from taskhub.models.org import Organization

ADMIN_INDEX_NAME = "uq_users_single_admin"
EMAIL_INDEX_NAME = "ix_users_email"

class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        # at most one admin system-wide
        sa.Index(
            ADMIN_INDEX_NAME,
            "role",
            unique=True,
            postgresql_where=sa.text("role = 'Admin'"),
            sqlite_where=sa.text("role = 'Admin'"),
        ),
        sa.Index(EMAIL_INDEX_NAME, "email", unique=True),
    )

    id: Mapped[UUID] = mapped_column(sa.Uuid, primary_key=True, default=uuid4)

    name: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    email: Mapped[str] = mapped_column(sa.String(320), nullable=False)
    password_hash: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        sa.Enum(Role, name="role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Role.user,
    )

    organization_id: Mapped[UUID] = mapped_column(
        sa.Uuid, sa.ForeignKey("organizations.id", ondelete="RESTRICT"), index=True, nullable=False
    )
    organization: Mapped[Organization] = relationship(lazy="joined")

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
    )
