from fastapi.testclient import TestClient

from todo_api.main import create_app
from todo_api.settings import get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("PERSISTENCE_BACKEND", "SQLITE_DB_PATH", "CORS_ALLOW_ORIGINS", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = get_settings()
        assert settings.persistence_backend == "memory"
        assert settings.sqlite_db_path == "./data/todos.db"
        assert settings.cors_allow_origins == ["*"]
        assert settings.log_level == "INFO"

    def test_unknown_backend_falls_back_to_memory(self, monkeypatch):
        monkeypatch.setenv("PERSISTENCE_BACKEND", "postgres")
        assert get_settings().persistence_backend == "memory"

    def test_sqlite_backend(self, monkeypatch):
        monkeypatch.setenv("PERSISTENCE_BACKEND", " SQLite ")
        monkeypatch.setenv("SQLITE_DB_PATH", "/tmp/custom.db")
        settings = get_settings()
        assert settings.persistence_backend == "sqlite"
        assert settings.sqlite_db_path == "/tmp/custom.db"

    def test_origins_are_split(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.example, http://b.example,,")
        assert get_settings().cors_allow_origins == ["http://a.example", "http://b.example"]

    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert get_settings().log_level == "DEBUG"

    def test_unknown_log_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        assert get_settings().log_level == "INFO"

    def test_app_builds_with_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("PERSISTENCE_BACKEND", "memory")
        monkeypatch.setenv("LOG_LEVEL", "VERBOSE")
        client = TestClient(create_app())
        assert client.get("/").status_code == 200
