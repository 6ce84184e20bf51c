from __future__ import annotations

from dataclasses import dataclass

from session import Session

HOME_PATH = "/"
LOGIN_PATH = "/login"
SIGNUP_PATH = "/signup"
LOGOUT_PATH = "/logout"
QUIZ_PATH = "/quiz"
ROADMAP_PATH = "/roadmap"

PUBLIC_PATHS = frozenset({HOME_PATH, LOGIN_PATH, SIGNUP_PATH, LOGOUT_PATH})


@dataclass(frozen=True)
class Allow:
    path: str


@dataclass(frozen=True)
class RedirectTo:
    path: str
    from_path: str | None = None


GateDecision = Allow | RedirectTo


def normalize_path(requested_path: str | None) -> str:
    path = (requested_path or "").strip()
    path = path.split("#", 1)[0].split("?", 1)[0]
    # "//dashboard" is the path "/dashboard", not a host.
    path = "/" + path.lstrip("/")
    if len(path) > 1:
        path = path.rstrip("/") or HOME_PATH
    return path


def is_public(path: str) -> bool:
    return normalize_path(path) in PUBLIC_PATHS


def decide(session: Session, requested_path: str) -> GateDecision:
    """Decide whether ``requested_path`` may render for ``session``.

    Rules, first match wins:

    1. public paths are always allowed;
    2. anonymous visitors go home, remembering where they were headed;
    3. a session that still owes onboarding is held on the quiz;
    4. everything else is allowed.

    The decision depends only on its arguments and must be recomputed on
    every navigation.
    """
    path = normalize_path(requested_path)
    if path in PUBLIC_PATHS:
        return Allow(path)
    if not session.is_authenticated:
        return RedirectTo(HOME_PATH, from_path=path)
    if session.needs_onboarding and path != QUIZ_PATH:
        return RedirectTo(QUIZ_PATH, from_path=path)
    return Allow(path)


def return_path(from_path: str | None, default: str = QUIZ_PATH) -> str:
    if not from_path:
        return default
    path = normalize_path(from_path)
    if path in PUBLIC_PATHS:
        return default
    return path
