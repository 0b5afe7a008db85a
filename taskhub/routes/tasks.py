import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskhub.auth.deps import get_actor
from taskhub.auth.tokens import Actor
from taskhub.db import get_db
from taskhub.operations import tasks as ops
from taskhub.schemas.envelope import Result
from taskhub.schemas.tasks import TaskCreateIn, TaskEnvelope, TaskListEnvelope, TaskUpdateIn

router = APIRouter(prefix="/tasks", tags=["tasks"])

@router.get("", response_model=TaskListEnvelope)
def list_tasks(
    actor: Actor = Depends(get_actor),
    db: Session = Depends(get_db),
) -> TaskListEnvelope:
    return ops.get_tasks(db, actor)

@router.get("/{task_id}", response_model=TaskEnvelope)
def get_task(
    task_id: uuid.UUID,
    actor: Actor = Depends(get_actor),
    db: Session = Depends(get_db),
) -> TaskEnvelope:
    return ops.get_task(db, actor, task_id)

@router.post("", response_model=TaskEnvelope)
def create_task(
    payload: TaskCreateIn,
    actor: Actor = Depends(get_actor),
    db: Session = Depends(get_db),
) -> TaskEnvelope:
    return ops.create_task(db, actor, payload)

@router.patch("/{task_id}", response_model=TaskEnvelope)
def update_task(
    task_id: uuid.UUID,
    payload: TaskUpdateIn,
    actor: Actor = Depends(get_actor),
    db: Session = Depends(get_db),
) -> TaskEnvelope:
    return ops.update_task(db, actor, task_id, payload)

@router.delete("/{task_id}", response_model=Result)
def delete_task(
    task_id: uuid.UUID,
    actor: Actor = Depends(get_actor),
    db: Session = Depends(get_db),
) -> Result:
    return ops.delete_task(db, actor, task_id)
