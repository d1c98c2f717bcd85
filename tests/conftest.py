"""Pytest configuration for shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from app.core.deps import get_note_store
from app.main import create_application
from domains.core import reset_service_registry
from domains.note_hub import Note, NoteStore


@pytest.fixture(autouse=True)
def _isolated_registry():
    reset_service_registry()
    yield
    reset_service_registry()


@pytest.fixture
def notes_file(tmp_path):
    return tmp_path / "data" / "notes.json"


@pytest.fixture
def store(notes_file):
    return NoteStore(notes_file, lock_timeout=5.0)


@pytest.fixture
def app(store):
    application = create_application()
    application.dependency_overrides[get_note_store] = lambda: store
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def seeded(store):
    """Store holding notes 1, 2, 3 in that order."""
    for i in (1, 2, 3):
        store.upsert(Note(id=i, title=f"note {i}", content=f"<p>{i}</p>", updated_at=i * 10))
    return store
