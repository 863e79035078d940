# File: tests/conftest.py

import pytest
import os
import sys
import tempfile
import sqlalchemy
from pathlib import Path
from sqlalchemy import text
from sqlalchemy_utils import database_exists, create_database

# 1. Add project root to path
sys.path.append(os.getcwd())

# 2. Point the library at a throwaway SQLite file BEFORE settings are imported
_TEST_DATA_DIR = Path(tempfile.mkdtemp(prefix="marklib-test-"))
os.environ["USE_SQLITE"] = "true"
os.environ["MARKLIB_DATA_DIR"] = str(_TEST_DATA_DIR)
os.environ["MARKLIB_SQLITE_PATH"] = str(_TEST_DATA_DIR / "library.db")
os.environ.pop("MARKLIB_DATABASE_URL", None)

# 3. Import Settings / Engine
from marklib.core.config.settings import settings
from marklib.core.database.connection import engine as TEST_ENGINE, SessionLocal
from marklib.features.directory_access.domain.models import CandidateFile


@pytest.fixture(scope="session", autouse=True)
def global_setup():
    """
    Runs once per test session.
    Ensures DB exists and all tables are created.
    """
    settings.ensure_dirs()

    if not database_exists(TEST_ENGINE.url):
        create_database(TEST_ENGINE.url)

    # Import all models to ensure they are registered
    from marklib.core.database.base import Base
    import marklib.features.library.data.sql_models  # noqa: F401

    Base.metadata.create_all(bind=TEST_ENGINE)

    yield


@pytest.fixture(scope="function", autouse=True)
def clean_db(global_setup):
    """
    Runs before EVERY test.
    Wipes every table so tests never see each other's books.
    """
    from marklib.core.database.base import Base

    Base.metadata.create_all(bind=TEST_ENGINE)

    with TEST_ENGINE.connect() as conn:
        trans = conn.begin()
        table_names = sqlalchemy.inspect(TEST_ENGINE).get_table_names()

        # Children first so foreign keys never block the wipe
        for table in reversed(Base.metadata.sorted_tables):
            if table.name in table_names:
                conn.execute(text(f'DELETE FROM "{table.name}";'))

        trans.commit()

    yield


@pytest.fixture(scope="function")
def db_session():
    """
    Provides a session for the test to use.
    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_candidate():
    """
    Builds an in-memory markdown candidate.
    """
    def _make(name="book.md", body="# Title\n\nSome words here.\n", content_type="text/markdown"):
        data = body.encode("utf-8") if isinstance(body, str) else body
        return CandidateFile(name=name, data=data, content_type=content_type)
    return _make
