"""Tests for the main.run entrypoint."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
import uvicorn
from pymongo.errors import ServerSelectionTimeoutError

import main


@pytest.fixture()
def captured(monkeypatch):
    captured = {}
    monkeypatch.setattr(main, "load_dotenv", lambda: None)
    monkeypatch.setattr(main, "configure_logging", lambda: None)
    monkeypatch.setenv("MONGO_URI", "mongodb://db:27017")
    monkeypatch.setenv("DB_NAME", "educate_app")
    monkeypatch.setenv("PORT", "4000")
    monkeypatch.setenv("LOG_LEVEL", "INFO")

    def fake_run(app, **kwargs):
        captured["app"] = app
        captured["run_kwargs"] = kwargs

    monkeypatch.setattr(uvicorn, "run", fake_run)
    return captured


def test_run_connects_before_serving(monkeypatch, tmp_path, captured):
    monkeypatch.setenv("IMAGES_DIR", str(tmp_path / "images"))
    database = SimpleNamespace()

    def fake_connect(uri, name):
        assert "app" not in captured
        captured["connect"] = (uri, name)
        return database

    monkeypatch.setattr(main.Database, "connect", fake_connect)

    main.run()

    assert captured["connect"] == ("mongodb://db:27017", "educate_app")
    assert captured["run_kwargs"] == {"host": "0.0.0.0", "port": 4000}
    assert captured["app"].state.database is database


def test_run_exits_when_database_is_unreachable(monkeypatch, captured):
    def fail(uri, name):
        raise ServerSelectionTimeoutError("no servers")

    monkeypatch.setattr(main.Database, "connect", fail)

    with pytest.raises(SystemExit) as excinfo:
        main.run()

    assert excinfo.value.code == 1
    assert "app" not in captured


def test_run_exits_on_missing_configuration(monkeypatch, captured):
    monkeypatch.delenv("MONGO_URI")

    with pytest.raises(SystemExit) as excinfo:
        main.run()

    assert excinfo.value.code == 1
    assert "app" not in captured


def test_run_exits_on_unknown_log_level(monkeypatch, captured):
    monkeypatch.setenv("LOG_LEVEL", "FOO")

    with pytest.raises(SystemExit) as excinfo:
        main.run()

    assert excinfo.value.code == 1
    assert "app" not in captured
