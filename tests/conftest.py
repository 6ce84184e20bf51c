from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from auth import SessionController
from db import init_schema
from store import SessionStore


@pytest.fixture
def session_factory(tmp_path) -> sessionmaker:
    engine = create_engine(f"sqlite:///{tmp_path / 'pathfinder.db'}")
    init_schema(engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def store(session_factory) -> SessionStore:
    return SessionStore(session_factory, storage_key="pf_auth")


@pytest.fixture
def controller(store) -> SessionController:
    return SessionController(store)
