import uuid
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from taskhub.errors import Conflict, Internal, ValidationFailed
from taskhub.models.base import Base

M = TypeVar("M", bound=Base)

class Repository(Generic[M]):
    """CRUD over one model.

    Enforces field-level constraints only (required fields, uniqueness).
    Not-found is a normal outcome: lookups return ``None`` and ``delete``
    returns ``False``. Cross-entity rules belong to the operations layer.
    """

    model: ClassVar[type[Base]]
    label: ClassVar[str]
    required_fields: ClassVar[tuple[str, ...]] = ()
    mutable_fields: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, db: Session):
        self.db = db

    def create(self, **values: Any) -> M:
        missing = [f for f in self.required_fields if f not in values]
        if missing:
            raise ValidationFailed(f"{missing[0]} is required")
        self._check_required(values)

        obj = self.model(**values)
        self.db.add(obj)
        self._flush()
        return obj  # type: ignore[return-value]

    def find_by_id(self, id: uuid.UUID, *, load_relations: bool = False) -> M | None:
        return self.db.get(self.model, id)  # type: ignore[return-value]

    def find_many(self, **filters: Any) -> list[M]:
        q = select(self.model).filter_by(**filters).order_by(self.model.created_at)
        return list(self.db.scalars(q).unique().all())

    def update(self, id: uuid.UUID, changes: dict[str, Any]) -> M | None:
        unknown = set(changes) - self.mutable_fields
        if unknown:
            raise ValidationFailed(f"{sorted(unknown)[0]} cannot be changed")

        obj = self.db.get(self.model, id)
        if obj is None:
            return None

        self._check_required(changes)
        for field, value in changes.items():
            setattr(obj, field, value)
        self._flush()
        return obj  # type: ignore[return-value]

    def delete(self, id: uuid.UUID) -> bool:
        obj = self.db.get(self.model, id)
        if obj is None:
            return False
        self.db.delete(obj)
        self._flush(deleting=True)
        return True

    def _check_required(self, values: dict[str, Any]) -> None:
        for field in self.required_fields:
            if field not in values:
                continue
            value = values[field]
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationFailed(f"{field} is required")

    def _flush(self, *, deleting: bool = False) -> None:
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            if deleting:
                raise Conflict(f"{self.label} is still referenced by other records") from None
            raise self.conflict_for(str(e.orig)) from None
        except SQLAlchemyError as e:
            self.db.rollback()
            raise Internal(f"Error saving {self.label.lower()}") from e

    def conflict_for(self, detail: str) -> Conflict:
        return Conflict(f"{self.label} conflicts with an existing record")
