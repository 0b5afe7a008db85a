import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from taskhub.models.task import Task
from taskhub.repositories.base import Repository

_JOINS = (
    joinedload(Task.organization),
    joinedload(Task.creator),
    joinedload(Task.assignee),
)

class TaskRepository(Repository[Task]):
    model = Task
    label = "Task"
    required_fields = ("title", "description", "status", "organization_id", "created_by", "assigned_to")
    # organization_id and created_by are fixed at creation
    mutable_fields = frozenset({"title", "description", "status", "due_date", "assigned_to"})

    def find_by_id(self, id: uuid.UUID, *, load_relations: bool = False) -> Task | None:
        if not load_relations:
            return self.db.get(Task, id)
        return self.db.get(Task, id, options=_JOINS, populate_existing=True)

    def find_many(self, **filters: Any) -> list[Task]:
        q = select(Task).options(*_JOINS).filter_by(**filters).order_by(Task.created_at)
        return list(self.db.scalars(q).unique().all())
