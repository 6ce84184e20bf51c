from __future__ import annotations

import logging
import threading
from typing import Callable

from session import Session, SessionPhase, anonymous_session, normalize_session
from store import SessionStore

logger = logging.getLogger(__name__)

SessionListener = Callable[[Session], None]


class SessionController:
    """Single writer for the device session.

    Every mutation replaces the in-memory snapshot, persists it through the
    store and then notifies subscribers with the new snapshot. Readers call
    ``current()`` before each decision instead of caching a session.
    """

    def __init__(self, store: SessionStore):
        self._store = store
        self._lock = threading.RLock()
        self._listeners: list[SessionListener] = []
        self._session = store.load()
        logger.info("Session restored in phase %s", self._session.phase.value)

    def current(self) -> Session:
        return self._session

    @property
    def phase(self) -> SessionPhase:
        return self._session.phase

    def login(self, identity: str) -> None:
        # Re-login from any phase restarts onboarding.
        self._replace(normalize_session(True, identity, True), "login")

    def logout(self) -> None:
        self._replace(anonymous_session(), "logout")

    def complete_onboarding(self) -> None:
        with self._lock:
            session = self._session
            updated = normalize_session(session.is_authenticated, session.identity, False)
            self._commit(updated, "complete_onboarding")
        self._notify(updated)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _replace(self, session: Session, action: str) -> None:
        with self._lock:
            self._commit(session, action)
        self._notify(session)

    def _commit(self, session: Session, action: str) -> None:
        previous = self._session.phase
        self._session = session
        self._store.save(session)
        logger.info("Session %s: %s -> %s", action, previous.value, session.phase.value)

    def _notify(self, session: Session) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(session)
            except Exception:
                logger.exception("Session listener %r failed", listener)
