"""
Tests for config.py.
"""

from psycopg.conninfo import conninfo_to_dict

from config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("DB_HOST", "DB_PORT", "DB_NAME", "PORT", "SECRET_KEY", "LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)
        s = Settings.from_env(load_env_file=False)
        assert s.db_host == "localhost"
        assert s.db_name == "datastruct_db"
        assert s.port == 3000
        assert s.log_level == "INFO"
        assert len(s.secret_key) == 64

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DB_HOST", "db.internal")
        monkeypatch.setenv("DB_PORT", "6543")
        monkeypatch.setenv("DB_POOL_MAX", "4")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        s = Settings.from_env(load_env_file=False)
        assert s.db_port == 6543
        assert s.db_pool_max == 4
        assert s.port == 8080
        assert s.log_level == "DEBUG"
        params = conninfo_to_dict(s.conninfo)
        assert params["host"] == "db.internal"
        assert params["port"] == "6543"

    def test_secret_not_in_repr(self):
        s = Settings(secret_key="hunter2")
        assert "hunter2" not in repr(s)

    def test_conninfo_quotes_awkward_values(self):
        s = Settings(db_user="app user", db_password="p w'x\\y")
        params = conninfo_to_dict(s.conninfo)
        assert params["user"] == "app user"
        assert params["password"] == "p w'x\\y"
        assert params["dbname"] == "datastruct_db"
        assert params["connect_timeout"] == "5"
