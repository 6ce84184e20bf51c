from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from db import db_session, get_storage_key
from models import SessionRecord
from session import Session, anonymous_session, decode_payload, encode_session, session_from_payload

logger = logging.getLogger(__name__)


class SessionStore:
    """Durable single-record persistence for the device session.

    Reads never fail: a missing row, a malformed payload or a storage error
    all come back as the anonymous session. Writes overwrite the one row
    under the storage key and are dropped with a warning if storage fails.
    """

    def __init__(self, session_factory: sessionmaker | None = None, storage_key: str | None = None):
        self._factory = session_factory
        self.storage_key = storage_key or get_storage_key()

    def load(self) -> Session:
        try:
            with db_session(self._factory) as db:
                record = db.get(SessionRecord, self.storage_key)
                raw = record.payload if record else None
        except SQLAlchemyError as exc:
            logger.warning("Session storage unavailable, starting anonymous: %s", exc)
            return anonymous_session()

        if raw is None:
            return anonymous_session()
        payload = decode_payload(raw)
        if payload is None:
            logger.debug("Stored session under %r is not a JSON object, starting anonymous", self.storage_key)
        return session_from_payload(payload)

    def save(self, session: Session) -> None:
        payload = encode_session(session)
        try:
            with db_session(self._factory) as db:
                record = db.get(SessionRecord, self.storage_key)
                if record is None:
                    db.add(SessionRecord(storage_key=self.storage_key, payload=payload))
                else:
                    record.payload = payload
        except SQLAlchemyError as exc:
            logger.warning("Could not persist session under %r: %s", self.storage_key, exc)

