import db
from db import DEFAULT_DATABASE_URL, get_database_url


def test_database_url_defaults_to_sqlite(monkeypatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setattr(db.st, "secrets", {})

    assert get_database_url() == DEFAULT_DATABASE_URL


def test_remote_postgres_url_gets_driver_and_ssl(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgres://user:pw@db.example.com:5432/pathfinder")

    assert get_database_url() == "postgresql+psycopg2://user:pw@db.example.com:5432/pathfinder?sslmode=require"


def test_local_postgres_url_keeps_its_query(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "'postgresql://user@localhost/pathfinder?sslmode=disable'")

    assert get_database_url() == "postgresql+psycopg2://user@localhost/pathfinder?sslmode=disable"


def test_database_url_is_read_from_nested_secret(monkeypatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setattr(db.st, "secrets", {"database": {"url": "sqlite:///from-secrets.db"}})

    assert get_database_url() == "sqlite:///from-secrets.db"


def test_environment_wins_over_secrets(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite:///from-env.db")
    monkeypatch.setattr(db.st, "secrets", {"DATABASE_URL": "sqlite:///from-secrets.db"})

    assert get_database_url() == "sqlite:///from-env.db"
