from datetime import datetime
from uuid import UUID, uuid4

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from taskhub.models.base import Base

class Organization(Base):
    __tablename__ = "organizations"

    id: Mapped[UUID] = mapped_column(sa.Uuid, primary_key=True, default=uuid4)

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
    )

    name: Mapped[str] = mapped_column(sa.String(120), nullable=False)
