import os
import uuid

# settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import taskhub.models  # noqa: F401
from taskhub.auth.tokens import Actor
from taskhub.db import enable_sqlite_foreign_keys, get_db
from taskhub.main import create_app
from taskhub.models.base import Base
from taskhub.models.enums import Role
from taskhub.models.org import Organization
from taskhub.models.user import User
from taskhub.operations.auth import register
from taskhub.schemas.auth import RegisterIn

PASSWORD = "s3cret-pass"

@pytest.fixture()
def db_session() -> Session:
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)

    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session: Session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()

@pytest.fixture()
def client(db_session: Session) -> TestClient:
    app = create_app()

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)

def make_org(db: Session, name: str = "Acme") -> Organization:
    org = Organization(name=name)
    db.add(org)
    db.commit()
    return org

def make_user(
    db: Session,
    org: Organization,
    name: str,
    role: Role = Role.user,
    email: str | None = None,
) -> User:
    email = email or f"{name.lower()}+{uuid.uuid4().hex[:8]}@example.com"
    res = register(
        db,
        RegisterIn(name=name, email=email, password=PASSWORD, organization_id=org.id, role=role),
    )
    assert res.success, res.message
    user = db.get(User, res.data.id)
    assert user is not None
    return user

def actor_for(user: User) -> Actor:
    return Actor(user_id=user.id, role=user.role, organization_id=user.organization_id)

@pytest.fixture()
def org(db_session: Session) -> Organization:
    return make_org(db_session, "Acme")

@pytest.fixture()
def other_org(db_session: Session) -> Organization:
    return make_org(db_session, "Globex")

@pytest.fixture()
def admin(db_session: Session, org: Organization) -> User:
    return make_user(db_session, org, "Alice", Role.admin, email="alice@example.com")

@pytest.fixture()
def manager(db_session: Session, org: Organization) -> User:
    return make_user(db_session, org, "Mallory", Role.manager)

@pytest.fixture()
def member(db_session: Session, org: Organization) -> User:
    return make_user(db_session, org, "Bob", Role.user)
