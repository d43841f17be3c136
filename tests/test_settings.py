import importlib

import pytest

from shopfront import settings as shop_settings


@pytest.fixture()
def reload_settings(monkeypatch):
    def reload(**env):
        for name in ("DJANGO_DEBUG", "POSTGRES_DB"):
            monkeypatch.delenv(name, raising=False)
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(shop_settings)

    yield reload
    monkeypatch.undo()
    importlib.reload(shop_settings)


class TestDebugFlag:
    def test_off_when_unset(self, reload_settings):
        assert reload_settings().DEBUG is False

    @pytest.mark.parametrize("value, expected", [("1", True), ("true", True), ("no", False)])
    def test_read_from_environment(self, reload_settings, value, expected):
        assert reload_settings(DJANGO_DEBUG=value).DEBUG is expected


class TestSqliteDatabase:
    def test_transactions_take_the_write_lock_at_begin(self, reload_settings):
        database = reload_settings().DATABASES["default"]

        assert database["ENGINE"] == "django.db.backends.sqlite3"
        assert database["OPTIONS"]["transaction_mode"] == "IMMEDIATE"
