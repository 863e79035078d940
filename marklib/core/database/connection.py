# File: marklib/core/database/connection.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from marklib.core.config.settings import settings
from marklib.core.database.base import Base

# Store calls run in worker threads (asyncio.to_thread), so SQLite must
# accept connections created on a different thread.
connect_args = {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency for obtaining a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Registers every feature model with the shared Base and creates
    missing tables.
    """
    settings.ensure_dirs()

    import marklib.features.library.data.sql_models  # noqa: F401

    Base.metadata.create_all(bind=engine)
