"""
Database configuration - SQLAlchemy 2.x (sync)
"""

from typing import Any, Dict
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from payment_core.infrastructure.settings import get_settings

settings = get_settings()


def engine_options(database_url: str) -> Dict[str, Any]:
    """Engine keyword arguments for the given URL"""
    if database_url.startswith("sqlite"):
        # Sessions are opened from FastAPI worker threads
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
    }


engine = create_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models - SQLAlchemy 2.x style"""
    pass


def get_db():
    """
    Dependency to get database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory() -> sessionmaker:
    """
    Dependency returning the session factory itself.

    The payment procedure opens several independent units of work (audit
    appends and the ledger transaction), so it needs the factory rather
    than a single request-scoped session.
    """
    return SessionLocal
