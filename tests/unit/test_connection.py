import pytest
from psycopg.conninfo import conninfo_to_dict

from app.config.settings import Settings
from app.database import connection
from app.database.connection import build_conninfo, get_connection


class TestBuildConninfo:
    def test_includes_credentials_and_timeouts(self) -> None:
        settings = Settings(
            db_host="db.internal",
            db_port=6543,
            db_database="docs",
            db_username="worker",
            db_password="pw",
            db_statement_timeout_ms=2500,
            db_connect_timeout_seconds=3,
        )

        params = conninfo_to_dict(build_conninfo(settings))

        assert params["host"] == "db.internal"
        assert params["port"] == "6543"
        assert params["dbname"] == "docs"
        assert params["user"] == "worker"
        assert params["connect_timeout"] == "3"
        assert params["options"] == "-c statement_timeout=2500"


class TestGetConnection:
    def test_requires_initialized_pool(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(connection, "_pool", None)

        with pytest.raises(RuntimeError, match="init_pool"):
            with get_connection():
                pass
