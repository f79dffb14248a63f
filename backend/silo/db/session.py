"""
Database Session Management

Provides database engine and session factory.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator

from silo.config import settings


# Create engine based on database URL
if settings.database_url.startswith("sqlite"):
    engine = create_engine(
        settings.database_url,
        connect_args={"check_same_thread": False}
    )
else:
    engine = create_engine(settings.database_url)


# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Initialization
# =============================================================================

def init_db() -> None:
    """Initialize database tables."""
    from silo.models.base import Base
    # Import all models to register them
    from silo.features.dataset import models  # noqa

    Base.metadata.create_all(bind=engine)
