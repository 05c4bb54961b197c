"""
Shared pytest fixtures for the Todo service test suite.

Every store-level and HTTP-level test that asks for ``store`` (directly or
through ``app``/``client``) runs once per backend: the in-memory store and
a SQLite store on a fresh file under ``tmp_path``.

Key Concepts Demonstrated:
- Parametrised fixtures to run one contract against several implementations
- Fixture dependencies (store -> app -> client)
- Test data factories with Faker
"""

import os
from collections.abc import Callable, Iterator

import pytest
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from todo_app import create_app
from todo_app.memory_store import InMemoryTaskStore
from todo_app.sqlite_store import SqliteTaskStore
from todo_app.store import Task, TaskStore


# Initialize Faker for generating test data
fake = Faker()


# -----------------------------------------------------------------------------
# Store Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def memory_store() -> InMemoryTaskStore:
    """Provide a fresh in-memory store."""
    return InMemoryTaskStore()


@pytest.fixture
def db_path(tmp_path) -> str:
    """Path of a not-yet-created SQLite file unique to the test."""
    return str(tmp_path / "tasks.db")


@pytest.fixture
def sqlite_store(db_path) -> Iterator[SqliteTaskStore]:
    """
    Provide a SQLite store on a fresh file.

    Yields:
        Open SqliteTaskStore; its engine is disposed after the test.
    """
    store = SqliteTaskStore(db_path)
    yield store
    store.close()


@pytest.fixture(params=["memory", "sqlite"])
def store(request) -> TaskStore:
    """
    Provide each backend in turn.

    Tests using this fixture run twice, once per backend, so they must
    not assume a particular first id.
    """
    return request.getfixturevalue(f"{request.param}_store")


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def app(store):
    """
    Create an application bound to the parametrised store.

    Args:
        store: Store fixture; the app never builds its own.

    Returns:
        Flask application instance configured for testing.
    """
    return create_app("testing", store=store)


@pytest.fixture
def client(app):
    """
    Create a test client for making HTTP requests.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


# -----------------------------------------------------------------------------
# Test Data Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def task_factory(store) -> Callable[..., Task]:
    """
    Factory fixture for creating tasks directly in the store.

    Example:
        def test_something(task_factory):
            task = task_factory(text="My Task")
            assert task.text == "My Task"
    """

    def _create_task(text: str | None = None) -> Task:
        if text is None:
            text = fake.sentence(nb_words=4)
        task_id = store.create_task(text)
        return Task(id=task_id, text=text)

    return _create_task


@pytest.fixture
def api_headers() -> dict[str, str]:
    """
    Provide common headers for API requests.

    Returns:
        Dictionary of HTTP headers.
    """
    return {
        "Content-Type": "application/json",
        "Accept": "application/json"
    }
