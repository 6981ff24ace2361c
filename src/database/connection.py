"""Database connection management."""
from pathlib import Path
from typing import Optional
from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import sessionmaker
from src.config import get_config
from src.database.models import Base
import logging

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def get_engine() -> Engine:
    """Get or create the SQLite engine at ``database.path``."""
    global _engine

    if _engine is None:
        config = get_config()
        db_path = config.database_path

        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        _engine = create_engine(
            f"sqlite:///{db_path}",
            connect_args={"check_same_thread": False},  # SQLite specific
            echo=config.get('database.echo', False)
        )

        logger.info(f"Database engine created: {db_path}")

    return _engine


def get_session_factory(engine: Optional[Engine] = None) -> sessionmaker:
    """Get or create session factory.

    Passing an engine builds an unshared factory for it (tests, tools).
    """
    global _SessionLocal

    if engine is not None:
        return sessionmaker(autocommit=False, autoflush=False, bind=engine)

    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())

    return _SessionLocal


def create_tables(engine: Optional[Engine] = None) -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine or get_engine())
    logger.info("Database tables created")


def drop_tables(engine: Optional[Engine] = None) -> None:
    """Drop all database tables (for testing)."""
    Base.metadata.drop_all(bind=engine or get_engine())
    logger.info("Database tables dropped")
