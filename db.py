import os
import re
import uuid
from contextlib import contextmanager
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

import streamlit as st
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from models import Base

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///pathfinder.db"
DEFAULT_STORAGE_KEY = "pf_auth"
DEVICE_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")
SECRET_URL_PATHS = (("DATABASE_URL",), ("database_url",), ("database", "url"))


def _secret(path: tuple[str, ...]) -> str | None:
    try:
        value = st.secrets
        for part in path:
            value = value[part]
    except Exception:
        # Missing key, or no secrets file at all outside a deployment.
        return None
    return str(value).strip() or None


def _normalize_database_url(database_url: str) -> str:
    url = database_url.strip().strip("\"'")
    for legacy in ("postgres://", "postgresql://"):
        if url.startswith(legacy):
            url = "postgresql+psycopg2://" + url[len(legacy):]
            break
    if not url.startswith("postgresql+psycopg2://"):
        return url

    parsed = urlparse(url)
    query = dict(parse_qsl(parsed.query, keep_blank_values=True))
    if (parsed.hostname or "").lower() not in {"localhost", "127.0.0.1", ""}:
        query.setdefault("sslmode", "require")
    return urlunparse(parsed._replace(query=urlencode(query)))


def get_database_url() -> str:
    database_url = os.getenv("DATABASE_URL")
    for path in SECRET_URL_PATHS:
        database_url = database_url or _secret(path)
    return _normalize_database_url(database_url or DEFAULT_DATABASE_URL)


def get_storage_key() -> str:
    return (os.getenv("SESSION_STORAGE_KEY") or "").strip() or DEFAULT_STORAGE_KEY


def new_device_id() -> str:
    return uuid.uuid4().hex


def is_device_id(value: str | None) -> bool:
    return bool(value) and DEVICE_ID_PATTERN.match(value) is not None


def scoped_storage_key(device_id: str | None) -> str:
    """Storage key for one browser: the configured prefix plus its device id."""
    prefix = get_storage_key()
    if not is_device_id(device_id):
        return prefix
    return f"{prefix}:{device_id}"


@st.cache_resource
def get_engine() -> Engine:
    return create_engine(get_database_url(), pool_pre_ping=True)


@st.cache_resource
def get_session_factory() -> sessionmaker:
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, expire_on_commit=False)


@contextmanager
def db_session(factory: sessionmaker | None = None) -> Session:
    factory = factory or get_session_factory()
    session: Session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_schema(engine: Engine | None = None) -> None:
    Base.metadata.create_all(bind=engine or get_engine())
