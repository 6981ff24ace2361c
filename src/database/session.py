"""Database session management."""
from contextlib import contextmanager
from typing import Generator, Optional
from sqlalchemy.orm import Session, sessionmaker
from src.database.connection import get_session_factory


@contextmanager
def get_db(session_factory: Optional[sessionmaker] = None) -> Generator[Session, None, None]:
    """
    Context manager for database sessions; commits on success.

    Usage:
        with get_db() as db:
            db.get(ForexSnapshot, key)
    """
    SessionLocal = session_factory or get_session_factory()
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
