"""
Database session management
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from legacy_audit.core.config import settings
from legacy_audit.db.base import Base
from legacy_audit import models  # noqa: F401
from legacy_audit.services.audit_hooks import setup_audit_listeners

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=False
)

# Create all tables automatically on startup for SQLite
if "sqlite" in settings.DATABASE_URL:
    Base.metadata.create_all(bind=engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

setup_audit_listeners()
