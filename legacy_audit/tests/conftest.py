"""
Pytest configuration and fixtures
"""
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from legacy_audit.main import app
from legacy_audit.db.base import Base
from legacy_audit.core.deps import get_db
from legacy_audit.core.logon import Logon
from legacy_audit.services.audit_context import AuditContext, SESSION_INFO_KEY
from legacy_audit.services.audit_hooks import setup_audit_listeners

# Import all models to ensure they're registered with Base.metadata
from legacy_audit.models import (  # noqa: F401
    Audit,
    Member,
    MemberMembership,
    Membership,
    MembershipContract,
    QuintessUser,
)


# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# Enable foreign keys for SQLite
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

setup_audit_listeners()


@pytest.fixture(scope="function")
def audit_ctx():
    """Fresh audit context per test so flags and caches never leak between tests"""
    return AuditContext()


@pytest.fixture(scope="function")
def db(audit_ctx):
    """Create a fresh database for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal(info={SESSION_INFO_KEY: audit_ctx})
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def reset_logon():
    """Every test starts without an acting editor"""
    Logon.clear()
    yield
    Logon.clear()


@pytest.fixture(scope="function")
def client(db):
    """Test client fixture with database override"""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def member(db):
    member = Member(member_uid=11, name="Ada Member")
    db.add(member)
    db.commit()
    return member


@pytest.fixture
def membership(db):
    membership = Membership(membership_uid=21, membership_number="M-0021")
    db.add(membership)
    db.commit()
    return membership


@pytest.fixture
def quintess_user(db):
    user = QuintessUser(quintess_user_uid=7, login="backoffice", active=True)
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def invoice_history(db):
    """Invoice#42 audited three times, plus one unrelated audit"""
    rows = [
        Audit(auditable_type="Invoice", auditable_id=42, action="create",
              audited_changes={"total": [None, 100]}, created_at=datetime(2026, 1, 1, 9, 0)),
        Audit(auditable_type="Invoice", auditable_id=42, action="update",
              audited_changes={"total": [100, 120]}, created_at=datetime(2026, 1, 2, 9, 0)),
        Audit(auditable_type="Invoice", auditable_id=42, action="update",
              audited_changes={"total": [120, 90]}, created_at=datetime(2026, 1, 3, 9, 0)),
        Audit(auditable_type="Booking", auditable_id=42, action="destroy",
              audited_changes={}, created_at=datetime(2026, 1, 2, 12, 0)),
    ]
    for row in rows:
        db.add(row)
        db.commit()
    return rows
