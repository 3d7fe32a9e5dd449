"""Tests for the infrastructure.db module."""

import pytest

from networth.infrastructure import db as db_module


def test_get_env_var_reads_environment(monkeypatch):
    """_get_env_var should load .env and return the requested value."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("NETWORTH_DB_URL", "sqlite:///networth.db")

    assert db_module._get_env_var("NETWORTH_DB_URL") == "sqlite:///networth.db"


def test_get_env_var_raises_when_missing(monkeypatch):
    """Missing env vars should raise a RuntimeError."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.delenv("NETWORTH_DB_URL", raising=False)

    with pytest.raises(RuntimeError):
        db_module._get_env_var("NETWORTH_DB_URL")


def test_create_engine_enables_health_checks(monkeypatch):
    """_create_engine should enable pre-ping on the pool."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["db_url"] = db_url
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    engine = db_module._create_engine("postgresql://networth")

    assert engine == "engine"
    assert captured["db_url"] == "postgresql://networth"
    assert captured["kwargs"]["pool_pre_ping"] is True
    assert captured["kwargs"]["future"] is True


def test_get_engine_caches_engine(monkeypatch):
    """get_engine should memoize the created engine."""
    monkeypatch.setattr(db_module, "_engine", None)
    created = []

    def fake_create_engine(url):
        created.append(url)
        return f"engine:{url}"

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("NETWORTH_DB_URL", "postgresql://networth")

    engine_one = db_module.get_engine()
    engine_two = db_module.get_engine()

    assert engine_one is engine_two
    assert engine_one == "engine:postgresql://networth"
    assert created == ["postgresql://networth"]


def test_adapter_prefers_injected_engine(monkeypatch):
    """SqlAlchemyDatabaseEngineAdapter should proxy the global helper."""
    monkeypatch.setattr(db_module, "get_engine", lambda: "global_engine")

    assert db_module.SqlAlchemyDatabaseEngineAdapter().get_engine() == (
        "global_engine"
    )
    assert db_module.SqlAlchemyDatabaseEngineAdapter(
        "injected"
    ).get_engine() == "injected"
