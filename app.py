from __future__ import annotations

import logging
import os
from typing import Callable

import streamlit as st

from auth import SessionController
from db import init_schema, is_device_id, new_device_id, scoped_storage_key
from export import build_json_summary, build_pdf_report, build_results_payload
from gate import (
    HOME_PATH,
    LOGIN_PATH,
    LOGOUT_PATH,
    QUIZ_PATH,
    ROADMAP_PATH,
    SIGNUP_PATH,
    RedirectTo,
    decide,
    normalize_path,
    return_path,
)
from quiz import QuizProgress, finish_quiz
from session import Session
from store import SessionStore
from ui import inject_css, render_next_steps, render_progress, render_stream_results

st.set_page_config(page_title="Pathfinder Career Guidance", layout="centered")

logger = logging.getLogger(__name__)

PAGE_TITLES = {
    HOME_PATH: "Home",
    LOGIN_PATH: "Login",
    SIGNUP_PATH: "Sign Up",
    "/dashboard": "Dashboard",
    QUIZ_PATH: "Career Aptitude Quiz",
    ROADMAP_PATH: "Career Roadmap",
    "/colleges": "Colleges",
    "/materials": "Study Materials",
    "/chat": "Career Chat",
    "/notifications": "Notifications",
    "/compare": "Compare",
    "/profile": "Profile",
}
NAV_PAGES = [path for path in PAGE_TITLES if path not in {HOME_PATH, LOGIN_PATH, SIGNUP_PATH}]


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )


@st.cache_resource
def bootstrap() -> None:
    configure_logging()
    init_schema()


def _query_get(key: str, default: str | None = None) -> str | None:
    value = st.query_params.get(key, default)
    if isinstance(value, list):
        return value[0] if value else default
    return value


def current_path() -> str:
    return normalize_path(_query_get("page", HOME_PATH))


def navigate(path: str) -> None:
    st.query_params["page"] = path
    st.rerun()


def _on_session_change(session: Session) -> None:
    # Login and logout both start the quiz over.
    if session.needs_onboarding or not session.is_authenticated:
        st.session_state.pop("quiz_progress", None)
        st.session_state.pop("quiz_results", None)


def get_device_id() -> str:
    device_id = _query_get("device")
    if not is_device_id(device_id):
        device_id = new_device_id()
        st.query_params["device"] = device_id
    return device_id


def get_controller() -> SessionController:
    storage_key = scoped_storage_key(get_device_id())
    controller = st.session_state.get("session_controller")
    if controller is None or st.session_state.get("session_storage_key") != storage_key:
        controller = SessionController(SessionStore(storage_key=storage_key))
        controller.subscribe(_on_session_change)
        st.session_state["session_controller"] = controller
        st.session_state["session_storage_key"] = storage_key
    return controller



def get_quiz_progress() -> QuizProgress:
    if "quiz_progress" not in st.session_state:
        st.session_state["quiz_progress"] = QuizProgress()
    return st.session_state["quiz_progress"]


def render_sidebar(controller: SessionController, path: str) -> None:
    session = controller.current()
    st.sidebar.title("Pathfinder")
    if not session.is_authenticated:
        for target in (HOME_PATH, LOGIN_PATH, SIGNUP_PATH):
            if st.sidebar.button(PAGE_TITLES[target], key=f"nav_{target}", disabled=target == path):
                navigate(target)
        return

    st.sidebar.success(f"Logged in as {session.identity}")
    if session.needs_onboarding:
        st.sidebar.info("Complete the aptitude quiz to unlock the rest of the portal.")
    for target in NAV_PAGES:
        if st.sidebar.button(PAGE_TITLES[target], key=f"nav_{target}", disabled=target == path):
            navigate(target)
    if st.sidebar.button("Logout", key="nav_logout"):
        navigate(LOGOUT_PATH)


def render_home(controller: SessionController, path: str) -> None:
    st.title("Find the stream that fits you")
    st.write("Take a short aptitude quiz and get a ranked stream recommendation.")
    if controller.current().is_authenticated:
        if st.button("Go to Dashboard"):
            navigate("/dashboard")
    elif st.button("Get Started"):
        navigate(LOGIN_PATH)


def render_login(controller: SessionController, path: str) -> None:
    st.title(PAGE_TITLES[path])
    with st.form(f"form_{path.strip('/')}"):
        identity = st.text_input("Email")
        submitted = st.form_submit_button("Continue")

    if submitted:
        identity = identity.strip()
        if not identity:
            st.error("Enter an email to continue")
            return
        controller.login(identity)
        navigate(return_path(st.session_state.pop("return_to", None)))


def render_logout(controller: SessionController, path: str) -> None:
    controller.logout()
    st.session_state.pop("return_to", None)
    navigate(LOGIN_PATH)


def render_quiz(controller: SessionController, path: str) -> None:
    progress = get_quiz_progress()
    st.title(PAGE_TITLES[QUIZ_PATH])
    st.caption("Answer these questions to discover the best career stream for you")
    if progress.completed:
        st.success("You have completed the quiz.")
        if st.button("Retake Quiz"):
            progress.restart()
            st.rerun()
        return

    question = progress.current_question()
    render_progress(progress.current_index + 1, len(progress.questions), progress.progress_percent())
    st.subheader(question.prompt)
    options = list(question.options)
    choice = st.radio(
        "Select the option that best describes you",
        options,
        index=options.index(progress.selected) if progress.selected in options else None,
        key=f"quiz_q_{question.id}",
    )

    back_col, next_col = st.columns(2)
    with back_col:
        if st.button("Previous", disabled=progress.current_index == 0):
            progress.back()
            st.rerun()
    with next_col:
        label = "Complete Quiz" if progress.is_last_question() else "Next Question"
        if st.button(label, type="primary"):
            progress.select(choice or "")
            ok, message = progress.advance()
            if not ok:
                st.error(message)
                return
            if progress.completed:
                outcome = finish_quiz(progress, controller)
                st.session_state["quiz_results"] = outcome["results"]
                st.toast("Quiz Completed! Taking you to your personalized career roadmap...")
                navigate(outcome["next_path"])
            st.rerun()


def render_roadmap(controller: SessionController, path: str) -> None:
    st.title(PAGE_TITLES[ROADMAP_PATH])
    results = st.session_state.get("quiz_results")
    if not results:
        st.info("Take the aptitude quiz to see your recommended streams.")
        if st.button("Start Quiz"):
            navigate(QUIZ_PATH)
        return

    render_stream_results(results)
    render_next_steps()

    payload = build_results_payload(controller.current(), results)
    json_col, pdf_col = st.columns(2)
    with json_col:
        st.download_button("Download JSON Summary", build_json_summary(payload), "quiz_results.json", "application/json")
    with pdf_col:
        st.download_button("Download PDF Report", build_pdf_report(payload), "quiz_results.pdf", "application/pdf")

    if st.button("Retake Quiz"):
        get_quiz_progress().restart()
        st.session_state.pop("quiz_results", None)
        navigate(QUIZ_PATH)


def render_placeholder(controller: SessionController, path: str) -> None:
    title = PAGE_TITLES.get(path)
    if title is None:
        st.title("Page not found")
        st.caption(f"No page at {path}")
        return
    st.title(title)
    st.caption("This section is served by the content catalog.")


PAGE_RENDERERS: dict[str, Callable[[SessionController, str], None]] = {
    HOME_PATH: render_home,
    LOGIN_PATH: render_login,
    SIGNUP_PATH: render_login,
    LOGOUT_PATH: render_logout,
    QUIZ_PATH: render_quiz,
    ROADMAP_PATH: render_roadmap,
}


def main() -> None:
    bootstrap()
    inject_css()
    controller = get_controller()
    path = current_path()

    decision = decide(controller.current(), path)
    if isinstance(decision, RedirectTo):
        if decision.from_path:
            st.session_state["return_to"] = decision.from_path
        logger.debug("Gate redirect %s -> %s", path, decision.path)
        navigate(decision.path)

    render_sidebar(controller, path)
    PAGE_RENDERERS.get(path, render_placeholder)(controller, path)


if __name__ == "__main__":
    main()
