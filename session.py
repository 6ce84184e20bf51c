from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


class SessionPhase(Enum):
    ANONYMOUS = "anonymous"
    ONBOARDING_PENDING = "onboarding_pending"
    ACTIVE = "active"


@dataclass(frozen=True)
class Session:
    is_authenticated: bool = False
    identity: str | None = None
    needs_onboarding: bool = False

    @property
    def phase(self) -> SessionPhase:
        if not self.is_authenticated:
            return SessionPhase.ANONYMOUS
        if self.needs_onboarding:
            return SessionPhase.ONBOARDING_PENDING
        return SessionPhase.ACTIVE


ANONYMOUS_SESSION = Session()


def anonymous_session() -> Session:
    return ANONYMOUS_SESSION


def normalize_session(is_authenticated: bool, identity: str | None, needs_onboarding: bool) -> Session:
    # Identity and the onboarding flag only exist on an authenticated session.
    if not is_authenticated:
        return ANONYMOUS_SESSION
    return Session(is_authenticated=True, identity=identity, needs_onboarding=needs_onboarding)


def session_to_payload(session: Session) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "isAuthenticated": session.is_authenticated,
        "needsOnboarding": session.needs_onboarding,
    }
    if session.identity is not None:
        payload["userEmail"] = session.identity
    return payload


def encode_session(session: Session) -> str:
    return json.dumps(session_to_payload(session), separators=(",", ":"))


def decode_payload(raw: str | None) -> dict[str, Any] | None:
    if not raw or not raw.strip():
        return None
    try:
        parsed = json.loads(raw)
    except (ValueError, RecursionError):
        # JSONDecodeError is a ValueError; deeply nested input overflows the decoder.
        return None
    return parsed if isinstance(parsed, dict) else None


def session_from_payload(payload: dict[str, Any] | None) -> Session:
    """Build a Session from a stored payload, defaulting to anonymous.

    Flags are read by truthiness and a non-string ``userEmail`` is treated
    as absent, so any dict yields a valid Session.
    """
    if not payload:
        return ANONYMOUS_SESSION
    identity = payload.get("userEmail")
    if not isinstance(identity, str):
        identity = None
    return normalize_session(
        bool(payload.get("isAuthenticated")),
        identity,
        bool(payload.get("needsOnboarding")),
    )


def decode_session(raw: str | None) -> Session:
    return session_from_payload(decode_payload(raw))
