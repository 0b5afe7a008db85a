import uuid

import structlog
from sqlalchemy.orm import Session

from taskhub.auth.tokens import Actor
from taskhub.config import settings
from taskhub.errors import NotFound, ValidationFailed
from taskhub.models.task import DEFAULT_TASK_STATUS, Task
from taskhub.operations.boundary import operation
from taskhub.rbac.guard import require_perm
from taskhub.repositories.tasks import TaskRepository
from taskhub.repositories.users import UserRepository
from taskhub.schemas.envelope import Result
from taskhub.schemas.orgs import OrgOut
from taskhub.schemas.tasks import TaskCreateIn, TaskEnvelope, TaskListEnvelope, TaskOut, TaskUpdateIn
from taskhub.schemas.users import UserRef

logger = structlog.get_logger()

TASK_NOT_FOUND = "Task not found"
ASSIGNEE_NOT_FOUND = "Assigned user not found"

# due_date may be cleared, the rest may not
_NON_NULLABLE = ("title", "description", "status", "assigned_to")

def to_task_out(t: Task) -> TaskOut:
    return TaskOut(
        id=t.id,
        title=t.title,
        description=t.description,
        status=t.status,
        due_date=t.due_date,
        organization=OrgOut.model_validate(t.organization),
        created_by=UserRef.model_validate(t.creator),
        assigned_to=UserRef.model_validate(t.assignee),
    )

@operation(TaskListEnvelope, "Error fetching tasks", list_data=True)
def get_tasks(db: Session, actor: Actor) -> TaskListEnvelope:
    require_perm(actor, "tasks:list")
    tasks = TaskRepository(db).find_many(organization_id=actor.organization_id)
    return TaskListEnvelope(
        success=True,
        message="Tasks fetched successfully",
        data=[to_task_out(t) for t in tasks],
    )

@operation(TaskEnvelope, "Error fetching task")
def get_task(db: Session, actor: Actor, task_id: uuid.UUID) -> TaskEnvelope:
    require_perm(actor, "tasks:read")
    t = TaskRepository(db).find_by_id(task_id, load_relations=True)
    if t is None:
        raise NotFound(TASK_NOT_FOUND)
    if settings.scope_single_reads_to_org and t.organization_id != actor.organization_id:
        raise NotFound(TASK_NOT_FOUND)
    return TaskEnvelope(success=True, message="Task fetched successfully", data=to_task_out(t))

@operation(TaskEnvelope, "Error creating task")
def create_task(db: Session, actor: Actor, payload: TaskCreateIn) -> TaskEnvelope:
    """Create a task in the actor's organization, created by the actor.

    The organization and creator come from the actor, never from the payload.
    """
    require_perm(actor, "tasks:create")

    if UserRepository(db).find_by_id(payload.assigned_to) is None:
        raise NotFound(ASSIGNEE_NOT_FOUND)

    tasks = TaskRepository(db)
    t = tasks.create(
        title=payload.title,
        description=payload.description,
        status=payload.status or DEFAULT_TASK_STATUS,
        due_date=payload.due_date,
        organization_id=actor.organization_id,
        created_by=actor.user_id,
        assigned_to=payload.assigned_to,
    )
    db.commit()

    logger.info(
        "task_created",
        task_id=str(t.id),
        organization_id=str(actor.organization_id),
        actor_id=str(actor.user_id),
    )

    t = tasks.find_by_id(t.id, load_relations=True)
    return TaskEnvelope(success=True, message="Task created successfully", data=to_task_out(t))

@operation(TaskEnvelope, "Error updating task")
def update_task(db: Session, actor: Actor, task_id: uuid.UUID, payload: TaskUpdateIn) -> TaskEnvelope:
    require_perm(actor, "tasks:update")

    changes = payload.model_dump(exclude_unset=True)
    for field in _NON_NULLABLE:
        if field in changes and changes[field] is None:
            raise ValidationFailed(f"{field} cannot be null")

    # an unresolved assignee aborts the whole update
    if "assigned_to" in changes and UserRepository(db).find_by_id(changes["assigned_to"]) is None:
        raise NotFound(ASSIGNEE_NOT_FOUND)

    tasks = TaskRepository(db)
    if tasks.update(task_id, changes) is None:
        raise NotFound(TASK_NOT_FOUND)
    db.commit()

    logger.info("task_updated", task_id=str(task_id), fields=sorted(changes), actor_id=str(actor.user_id))

    t = tasks.find_by_id(task_id, load_relations=True)
    return TaskEnvelope(success=True, message="Task updated successfully", data=to_task_out(t))

@operation(Result, "Error deleting task")
def delete_task(db: Session, actor: Actor, task_id: uuid.UUID) -> Result:
    require_perm(actor, "tasks:delete")
    if not TaskRepository(db).delete(task_id):
        raise NotFound(TASK_NOT_FOUND)
    db.commit()

    logger.info("task_deleted", task_id=str(task_id), actor_id=str(actor.user_id))
    return Result(success=True, message="Task deleted successfully")
