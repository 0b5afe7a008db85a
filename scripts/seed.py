import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from taskhub.auth.passwords import hash_password
from taskhub.db import SessionLocal
from taskhub.models.enums import Role
from taskhub.models.org import Organization
from taskhub.models.task import Task
from taskhub.models.user import User

SEED_PASSWORD = "change-me-please"

@dataclass
class SeedResult:
    admin_email: str
    manager_email: str
    user_email: str
    organization_id: uuid.UUID
    task_id: uuid.UUID

def get_or_create_org(db: Session, name: str) -> Organization:
    o = db.scalar(select(Organization).where(Organization.name == name))
    if o is None:
        o = Organization(name=name)
        db.add(o)
        db.flush()
    return o

def get_or_create_user(db: Session, org_id: uuid.UUID, email: str, name: str, role: Role) -> User:
    email = email.lower().strip()
    u = db.scalar(select(User).where(User.email == email))
    if u is None:
        if role == Role.admin:
            # keep an existing admin rather than trip the single-admin index
            existing = db.scalar(select(User).where(User.role == Role.admin))
            if existing is not None:
                return existing
        u = User(
            name=name,
            email=email,
            password_hash=hash_password(SEED_PASSWORD),
            role=role,
            organization_id=org_id,
        )
        db.add(u)
        db.flush()
    return u

def get_or_create_task(
    db: Session,
    org_id: uuid.UUID,
    title: str,
    created_by: uuid.UUID,
    assigned_to: uuid.UUID,
) -> Task:
    t = db.scalar(select(Task).where(Task.organization_id == org_id, Task.title == title))
    if t is None:
        t = Task(
            organization_id=org_id,
            title=title,
            description="created by scripts/seed.py",
            created_by=created_by,
            assigned_to=assigned_to,
        )
        db.add(t)
        db.flush()
    elif t.assigned_to != assigned_to:
        # keep it stable if you re-run seed
        t.assigned_to = assigned_to
        db.flush()
    return t

def seed() -> SeedResult:
    # organization creation needs a token, so the first one comes from here
    with SessionLocal() as db:
        org = get_or_create_org(db, "Acme")

        admin = get_or_create_user(db, org.id, "admin@example.com", "admin", Role.admin)
        manager = get_or_create_user(db, org.id, "manager@example.com", "manager", Role.manager)
        user = get_or_create_user(db, org.id, "user@example.com", "user", Role.user)

        task = get_or_create_task(db, org.id, "seeded task", created_by=manager.id, assigned_to=user.id)

        db.commit()

        return SeedResult(
            admin_email=admin.email,
            manager_email=manager.email,
            user_email=user.email,
            organization_id=org.id,
            task_id=task.id,
        )

if __name__ == "__main__":
    r = seed()
    print("seed complete")
    print(f"organization_id={r.organization_id}")
    print(f"task_id={r.task_id}")
    print(f"users (password: {SEED_PASSWORD}):")
    print(f"  admin:   {r.admin_email}")
    print(f"  manager: {r.manager_email}")
    print(f"  user:    {r.user_email}")
