import uuid
from datetime import date

from sqlalchemy import func, select

from conftest import actor_for, make_user
from taskhub.config import settings
from taskhub.models.enums import Role
from taskhub.models.task import Task
from taskhub.operations.tasks import create_task, delete_task, get_task, get_tasks, update_task
from taskhub.operations.users import delete_user
from taskhub.schemas.tasks import TaskCreateIn, TaskUpdateIn

def _count_tasks(db) -> int:
    return db.scalar(select(func.count()).select_from(Task))

def _new_task(db, creator, assignee, **extra):
    payload = TaskCreateIn(title="Write docs", description="API reference", assigned_to=assignee.id, **extra)
    return create_task(db, actor_for(creator), payload)

def test_create_task_by_manager(db_session, org, manager, member):
    res = _new_task(db_session, manager, member, due_date=date(2030, 1, 15))
    assert res.success is True
    assert res.message == "Task created successfully"

    t = res.data
    assert t.status == "todo"
    assert t.due_date == date(2030, 1, 15)
    assert t.organization.id == org.id
    assert t.created_by.id == manager.id
    assert t.created_by.name == "Mallory"
    assert t.assigned_to.id == member.id

def test_create_task_requires_manager_or_admin(db_session, org, member):
    res = _new_task(db_session, member, member)
    assert (res.success, res.message) == (False, "Access Denied")
    assert _count_tasks(db_session) == 0

def test_create_task_unknown_assignee_persists_nothing(db_session, org, manager):
    payload = TaskCreateIn(title="t", description="d", assigned_to=uuid.uuid4())
    res = create_task(db_session, actor_for(manager), payload)
    assert (res.success, res.message, res.data) == (False, "Assigned user not found", None)
    assert _count_tasks(db_session) == 0

def test_task_org_comes_from_actor(db_session, org, other_org, manager):
    outsider = make_user(db_session, other_org, "Eve")
    res = _new_task(db_session, manager, outsider)
    assert res.success is True
    assert res.data.organization.id == org.id

def test_get_tasks_is_tenant_scoped(db_session, org, other_org, manager, member):
    mine = _new_task(db_session, manager, member).data
    boss = make_user(db_session, other_org, "Zed", Role.manager)
    theirs = _new_task(db_session, boss, boss).data

    res = get_tasks(db_session, actor_for(member))
    assert res.success is True
    ids = [t.id for t in res.data]
    assert mine.id in ids
    assert theirs.id not in ids

def test_get_task(db_session, org, manager, member):
    created = _new_task(db_session, manager, member).data

    res = get_task(db_session, actor_for(member), created.id)
    assert res.success is True
    assert res.data.title == "Write docs"
    assert res.data.assigned_to.name == "Bob"

    res = get_task(db_session, actor_for(member), uuid.uuid4())
    assert (res.success, res.message) == (False, "Task not found")

def test_get_task_can_be_scoped_to_org(db_session, org, other_org, manager, member, monkeypatch):
    boss = make_user(db_session, other_org, "Zed", Role.manager)
    theirs = _new_task(db_session, boss, boss).data

    assert get_task(db_session, actor_for(member), theirs.id).success is True
    monkeypatch.setattr(settings, "scope_single_reads_to_org", True)
    assert get_task(db_session, actor_for(member), theirs.id).message == "Task not found"

def test_update_task_is_partial(db_session, org, manager, member):
    created = _new_task(db_session, manager, member, status="open").data

    res = update_task(db_session, actor_for(member), created.id, TaskUpdateIn(status="done"))
    assert res.success is True
    assert res.data.status == "done"
    assert res.data.title == "Write docs"
    assert res.data.description == "API reference"
    assert res.data.assigned_to.id == member.id

def test_update_task_reassigns(db_session, org, manager, member):
    created = _new_task(db_session, manager, member).data

    res = update_task(db_session, actor_for(manager), created.id, TaskUpdateIn(assigned_to=manager.id))
    assert res.success is True
    assert res.data.assigned_to.id == manager.id
    assert res.data.created_by.id == manager.id

def test_update_task_bad_assignee_aborts_everything(db_session, org, manager, member):
    created = _new_task(db_session, manager, member).data

    res = update_task(
        db_session,
        actor_for(manager),
        created.id,
        TaskUpdateIn(title="renamed", assigned_to=uuid.uuid4()),
    )
    assert (res.success, res.message) == (False, "Assigned user not found")

    t = db_session.get(Task, created.id)
    assert t.title == "Write docs"
    assert t.assigned_to == member.id

def test_update_task_null_rules(db_session, org, manager, member):
    created = _new_task(db_session, manager, member, due_date=date(2030, 1, 15)).data

    res = update_task(db_session, actor_for(manager), created.id, TaskUpdateIn(title=None))
    assert (res.success, res.message) == (False, "title cannot be null")

    res = update_task(db_session, actor_for(manager), created.id, TaskUpdateIn(due_date=None))
    assert res.success is True
    assert res.data.due_date is None

def test_update_missing_task(db_session, org, manager):
    res = update_task(db_session, actor_for(manager), uuid.uuid4(), TaskUpdateIn(title="x"))
    assert (res.success, res.message) == (False, "Task not found")

def test_delete_task(db_session, org, manager, member):
    created = _new_task(db_session, manager, member).data

    res = delete_task(db_session, actor_for(member), created.id)
    assert (res.success, res.message) == (True, "Task deleted successfully")
    assert _count_tasks(db_session) == 0

    res = delete_task(db_session, actor_for(member), created.id)
    assert (res.success, res.message) == (False, "Task not found")

def test_assigned_user_cannot_be_deleted(db_session, org, admin, manager, member):
    _new_task(db_session, manager, member)

    res = delete_user(db_session, actor_for(admin), member.id)
    assert res.success is False
    assert "still referenced" in res.message
