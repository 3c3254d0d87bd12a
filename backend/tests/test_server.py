from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy import inspect

from api import server as server_module
from api.server import Server, bootstrap
from domain.errors import MappingError, PersistenceError
from repositories import InMemoryBookStore, SqlBookStore
from settings import ConfigError, Settings


def test_bootstrap_memory_store():
    result = bootstrap(Settings({"BOOK_STORE": "memory", "PORT": "7070"}))
    assert result.ok
    assert isinstance(result.server.store, InMemoryBookStore)
    assert result.server.address == "0.0.0.0:7070"


def test_bootstrap_database_creates_schema():
    result = bootstrap(Settings({"DATABASE_URL": "sqlite://"}))
    assert result.ok
    server = result.server
    assert isinstance(server.store, SqlBookStore)
    columns = {c["name"] for c in inspect(server.engine).get_columns("books")}
    assert {"id", "author", "title", "created_at", "updated_at", "deleted_at"} <= columns

    client = TestClient(server.app)
    resp = client.post("/books", json={"author": "A", "title": "T"})
    assert resp.status_code == 201
    server.close()


def test_bootstrap_missing_config_is_reported_not_fatal():
    result = bootstrap(Settings({"DB_USER": "u"}))
    assert not result.ok
    assert isinstance(result.error, ConfigError)
    assert "DB_PASSWORD" in str(result.error)


def test_bootstrap_unknown_store():
    result = bootstrap(Settings({"BOOK_STORE": "redis"}))
    assert isinstance(result.error, ConfigError)


def test_bootstrap_unreachable_database():
    result = bootstrap(Settings({"DATABASE_URL": "sqlite:////nonexistent-dir/sub/books.db"}))
    assert not result.ok
    assert isinstance(result.error, PersistenceError)


def test_bootstrap_reports_mapping_drift():
    with patch.object(server_module, "check_book_mapping", side_effect=MappingError("drift")):
        result = bootstrap(Settings({"DATABASE_URL": "sqlite://"}))
    assert isinstance(result.error, MappingError)


def test_start_runs_uvicorn_with_address():
    server = Server(InMemoryBookStore(), host="127.0.0.1", port=9000)
    with patch.object(server_module.uvicorn, "run") as run:
        server.start()
    run.assert_called_once_with(server.app, host="127.0.0.1", port=9000)


def test_main_exits_nonzero_on_failed_bootstrap(monkeypatch):
    from api import main as main_module

    monkeypatch.setattr("settings.load_settings", lambda: Settings({}))
    assert main_module.main() == 1
