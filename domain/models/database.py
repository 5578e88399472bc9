"""
Database configuration and session management.
"""

import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import settings

logger = logging.getLogger("honestmeals.database")

# Create SQLAlchemy Base
Base = declarative_base()


def _engine_options() -> dict:
    options = {"echo": settings.db_echo, "future": True}
    if settings.is_sqlite():
        # SQLite sessions are shared across the threadpool that serves requests
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in settings.database_url or settings.database_url.rstrip(
            "/"
        ).endswith("sqlite:"):
            options["poolclass"] = StaticPool
    return options


# Create engine
engine = create_engine(settings.database_url, **_engine_options())

# Create session factory
SessionLocal = sessionmaker(bind=engine, autoflush=False, future=True)


def init_database():
    """Initialize database schema"""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
