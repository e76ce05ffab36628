"""
Database engine and data source management.

Builds the SQLAlchemy engine from environment configuration with sensible
test fallbacks (SQLite in-memory) and exposes the ``DataSource`` handle the
controller uses to open sessions.
"""
import os
import sys
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

MEMORY_URL = "sqlite+pysqlite:///:memory:"


# Database connection URL
# Generate dynamically from individual components if DATABASE_URL is not provided
def _get_database_url() -> Optional[str]:
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    db_user = os.getenv("POSTGRES_USER")
    db_password = os.getenv("POSTGRES_PASSWORD")
    db_host = os.getenv("POSTGRES_HOST")
    db_port = os.getenv("POSTGRES_PORT")
    db_name = os.getenv("POSTGRES_DB")

    if not all([db_user, db_password, db_host, db_port, db_name]):
        missing = []
        if not db_user: missing.append("POSTGRES_USER")
        if not db_password: missing.append("POSTGRES_PASSWORD")
        if not db_host: missing.append("POSTGRES_HOST")
        if not db_port: missing.append("POSTGRES_PORT")
        if not db_name: missing.append("POSTGRES_DB")
        if _is_pytest_runtime():
            return None
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    return f"postgresql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest.

    ``PYTEST_CURRENT_TEST`` is only set while a test runs, so also look for the
    pytest package in ``sys.modules``, which is reliable once collection has
    started. ``PYTEST_RUNNING=1`` forces the answer.
    """
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    if "pytest" in sys.modules:
        return True
    return False


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite") and ":memory:" in url:
        # StaticPool so the schema persists across connections
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {}


def _create_engine_with_fallback(url: str, kwargs: dict) -> Engine:
    """Create engine; under pytest without an explicit DB, fall back to in-memory sqlite."""
    try:
        return create_engine(url, **kwargs)
    except OperationalError:
        if _is_pytest_runtime() and not os.getenv("PLAYHUB_TEST_DB"):
            return create_engine(MEMORY_URL, **_engine_kwargs(MEMORY_URL))
        raise


class DataSource:
    """An engine plus the session factory bound to it.

    Shared read-only between requests; every unit of work obtains its own
    session from ``session_factory``.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    @classmethod
    def from_url(cls, url: str, *, create_schema: bool = False) -> "DataSource":
        source = cls(_create_engine_with_fallback(url, _engine_kwargs(url)))
        if create_schema:
            source.create_schema()
        return source

    @property
    def url(self) -> str:
        return str(self.engine.url)

    def create_schema(self) -> None:
        # Local import keeps models free to import this module
        from playhub.db import models
        models.Base.metadata.create_all(bind=self.engine)

    def drop_schema(self) -> None:
        from playhub.db import models
        models.Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    def __repr__(self) -> str:
        return f"DataSource({self.engine.url!r})"


# Test override strategy:
# 1. If PLAYHUB_TEST_DB is set, use it.
# 2. Else if running under pytest without DATABASE_URL/POSTGRES_*, use in-memory sqlite.
explicit_test_db = os.getenv("PLAYHUB_TEST_DB")
DATABASE_URL = explicit_test_db or _get_database_url() or MEMORY_URL

_default_source: Optional[DataSource] = None


def get_default_source() -> DataSource:
    """Return the process-wide data source built from configuration."""
    global _default_source
    if _default_source is None:
        _default_source = DataSource.from_url(DATABASE_URL)
        # Pure in-memory databases have no migrations applied; create the schema eagerly
        if DATABASE_URL == MEMORY_URL:
            _default_source.create_schema()
    return _default_source
