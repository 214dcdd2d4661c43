import logging
import pytest
from pydantic import ValidationError
from gateway.config import Settings, get_settings
from gateway.utils.logger import configure_logging, get_logger

ENV_VARS = [
    "MYSQLHOST", "MYSQLPORT", "MYSQLDATABASE", "DB_DRIVER", "DB_POOL_SIZE",
    "DB_VERIFY_ON_STARTUP", "MYSQL_ADMIN_USER", "MYSQL_ADMIN_PASSWORD",
    "MYSQL_GUEST_USER", "MYSQL_GUEST_PASSWORD", "ADMIN_DATABASE_URL",
    "GUEST_DATABASE_URL", "PORT", "ALLOWED_ORIGIN", "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(clean_env):
    s = Settings(_env_file=None)
    assert s.db_host == "localhost"
    assert s.db_port == 3306
    assert s.db_name == "4537_lab4"
    assert s.port == 3000
    assert s.allowed_origin == "https://illustrious-bubblegum-77febb.netlify.app"

    admin = s.admin_url()
    guest = s.guest_url()
    assert admin.drivername == "mysql+aiomysql"
    assert (admin.username, admin.password) == ("admin", "admin_password")
    assert (guest.username, guest.password) == ("guest", "guest_password")
    assert admin.host == guest.host == "localhost"
    assert admin.database == guest.database == "4537_lab4"


def test_environment_overrides(clean_env, monkeypatch):
    monkeypatch.setenv("MYSQLHOST", "db.internal")
    monkeypatch.setenv("MYSQLPORT", "3307")
    monkeypatch.setenv("MYSQL_GUEST_USER", "reader")
    monkeypatch.setenv("MYSQL_GUEST_PASSWORD", "p@ss/word")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ALLOWED_ORIGIN", "*")

    s = Settings(_env_file=None)
    guest = s.guest_url()
    assert guest.host == "db.internal"
    assert guest.port == 3307
    assert guest.username == "reader"
    assert guest.password == "p@ss/word"
    assert s.admin_url().username == "admin"
    assert s.port == 8080
    assert s.allowed_origin == "*"


def test_url_override_wins(clean_env, monkeypatch):
    monkeypatch.setenv("ADMIN_DATABASE_URL", "sqlite+aiosqlite:///./admin.db")
    s = Settings(_env_file=None)
    assert s.admin_url().drivername == "sqlite+aiosqlite"
    assert s.guest_url().drivername == "mysql+aiomysql"


def test_settings_are_immutable(clean_env):
    s = Settings(_env_file=None)
    with pytest.raises(ValidationError):
        s.port = 1


def test_get_settings_is_cached(clean_env):
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()


def test_configure_logging_installs_one_handler():
    root = logging.getLogger()
    before, level = len(root.handlers), root.level
    try:
        configure_logging("debug")
        configure_logging("warning")
        assert len(root.handlers) - before <= 1
        assert root.level == logging.WARNING
    finally:
        root.setLevel(level)
    assert get_logger("gateway.test").name == "gateway.test"
