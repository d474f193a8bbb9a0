from datetime import datetime, timedelta, UTC

import pytest
from fastapi.testclient import TestClient

import taskboard.config
from taskboard.main import app
from taskboard.services.board import BoardService, get_board_service
from taskboard.stores.document import DocumentStore
from taskboard.stores.relational import RelationalStore

EDIT_PASSWORD = "open sesame"


class FakeClock:
    """Advances one second per reading so timestamps are distinct and ordered."""

    def __init__(self, start=datetime(2025, 3, 1, 9, 0, tzinfo=UTC)):
        self.now = start

    def __call__(self):
        self.now = self.now + timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def document_store(tmp_path, clock):
    return DocumentStore(tmp_path / "data" / "board.json", clock=clock)


@pytest.fixture
def relational_store(tmp_path, clock):
    return RelationalStore(f"sqlite:///{tmp_path / 'board.db'}", clock=clock)


@pytest.fixture(params=["json", "db"])
def store(request, document_store, relational_store):
    if request.param == "json":
        return document_store
    return relational_store


@pytest.fixture
def board(store):
    return BoardService(store)


@pytest.fixture
def edit_password(monkeypatch):
    monkeypatch.setattr(taskboard.config, "EDIT_PASSWORD", EDIT_PASSWORD)
    return EDIT_PASSWORD


@pytest.fixture
def client(board, edit_password):
    app.dependency_overrides[get_board_service] = lambda: board
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def editor(client):
    r = client.post("/api/auth", json={"password": EDIT_PASSWORD})
    assert r.status_code == 200
    return client
