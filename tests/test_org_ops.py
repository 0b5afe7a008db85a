import uuid

from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from conftest import actor_for
from taskhub.models.org import Organization
from taskhub.operations.orgs import (
    create_organization,
    delete_organization,
    get_organization,
    get_organizations,
    update_organization,
)
from taskhub.schemas.orgs import OrgCreateIn, OrgUpdateIn

def test_create_and_list(db_session, org, member):
    actor = actor_for(member)
    res = create_organization(db_session, actor, OrgCreateIn(name="  Initech "))
    assert res.success is True
    assert res.message == "Organization created successfully"
    assert res.data.name == "Initech"

    res = get_organizations(db_session, actor)
    assert res.success is True
    assert {o.name for o in res.data} == {"Acme", "Initech"}

def test_get_organization(db_session, org, member):
    res = get_organization(db_session, actor_for(member), org.id)
    assert (res.success, res.data.name) == (True, "Acme")

    res = get_organization(db_session, actor_for(member), uuid.uuid4())
    assert (res.success, res.message, res.data) == (False, "Organization not found", None)

def test_rename(db_session, org, member):
    res = update_organization(db_session, actor_for(member), org.id, OrgUpdateIn(name="Acme Corp"))
    assert res.success is True
    assert res.data.name == "Acme Corp"
    assert res.data.id == org.id

    res = update_organization(db_session, actor_for(member), uuid.uuid4(), OrgUpdateIn(name="x"))
    assert res.message == "Organization not found"

def test_delete_empty_org(db_session, org, member):
    empty = create_organization(db_session, actor_for(member), OrgCreateIn(name="Empty")).data

    res = delete_organization(db_session, actor_for(member), empty.id)
    assert (res.success, res.message) == (True, "Organization deleted successfully")
    assert db_session.get(Organization, empty.id) is None

    res = delete_organization(db_session, actor_for(member), empty.id)
    assert (res.success, res.message) == (False, "Organization not found")

def test_delete_org_with_users_is_refused(db_session, org, member):
    res = delete_organization(db_session, actor_for(member), org.id)
    assert res.success is False
    assert "still referenced" in res.message
    assert db_session.get(Organization, org.id) is not None

def test_store_failure_is_reported_not_raised(db_session, org, member, monkeypatch):
    def _disk_full(*args, **kwargs):
        raise OperationalError("INSERT INTO organizations", {}, Exception("database or disk is full"))

    monkeypatch.setattr(db_session, "flush", _disk_full)
    res = create_organization(db_session, actor_for(member), OrgCreateIn(name="Initech"))
    assert (res.success, res.message, res.data) == (False, "Error saving organization", None)

    monkeypatch.undo()
    assert db_session.scalar(select(func.count()).select_from(Organization)) == 1
