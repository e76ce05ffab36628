import os

import pytest

# Cheap hashing for the test run; read when playhub.utils.passwords is imported
os.environ.setdefault("PLAYHUB_ARGON2_TIME_COST", "1")
os.environ.setdefault("PLAYHUB_ARGON2_MEMORY_COST", "1024")

from playhub.db import schemas  # noqa: E402
from playhub.db.database import MEMORY_URL, DataSource  # noqa: E402
from playhub.services.controller import Controller  # noqa: E402


@pytest.fixture
def source():
    """Fresh in-memory store with all four collections created."""
    src = DataSource.from_url(os.getenv("PLAYHUB_TEST_DB") or MEMORY_URL, create_schema=True)
    try:
        yield src
    finally:
        src.drop_schema()
        src.dispose()


@pytest.fixture
def db(source):
    session = source.session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def controller(source):
    return Controller(source)


@pytest.fixture
def client(controller):
    from fastapi.testclient import TestClient

    from playhub.api.deps import get_controller
    from playhub.api.main import app

    app.dependency_overrides[get_controller] = lambda: controller
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_controller, None)


@pytest.fixture
def make_playground(controller):
    def _make(name: str = "Slyngerparken", **fields) -> str:
        return controller.create_playground(schemas.PlaygroundCreate(name=name, **fields))

    return _make


@pytest.fixture
def make_user(controller):
    def _make(username: str = "nicolai", password: str = "secret", **fields) -> str:
        return controller.create_user(schemas.UserCreate(username=username, password=password, **fields))

    return _make
