"""Session-state helpers: the single in-memory snapshot the UI edits."""

from __future__ import annotations
from typing import List, Optional
import streamlit as st

from calculator.defaults import initial_state
from calculator.models import CalculatorState, Project
from services import project_store
from services.auth import Session

STATE_KEY = "calc_state"
ACTIVE_PROJECT_KEY = "active_project_id"
PROJECT_NAME_KEY = "project_name"
AUTH_SESSION_KEY = "auth_session"
PROJECTS_CACHE_KEY = "projects_cache"


def get_state() -> CalculatorState:
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = initial_state()
    return st.session_state[STATE_KEY]


def set_state(state: CalculatorState) -> None:
    st.session_state[STATE_KEY] = state


def get_active_project_id() -> Optional[str]:
    return st.session_state.get(ACTIVE_PROJECT_KEY)


def get_project_name() -> str:
    return st.session_state.get(PROJECT_NAME_KEY, "")


def open_project(project: Project) -> None:
    """Make a project the one being edited."""
    st.session_state[ACTIVE_PROJECT_KEY] = project.id
    st.session_state[PROJECT_NAME_KEY] = project.name
    set_state(project.state)


def close_project() -> None:
    """Back to an unsaved calculation with default inputs."""
    st.session_state[ACTIVE_PROJECT_KEY] = None
    st.session_state[PROJECT_NAME_KEY] = ""
    set_state(initial_state())


def get_projects(session: Optional[Session]) -> List[Project]:
    """
    Project list of the current account, loaded once and kept across reruns.

    Widget interaction reruns the script; storage is only read again after
    invalidate_projects() or when the account changes.
    """
    owner = session.user_id if session else ""
    cached = st.session_state.get(PROJECTS_CACHE_KEY)
    if cached is not None and cached[0] == owner:
        return cached[1]

    projects = project_store.load_projects(session)
    st.session_state[PROJECTS_CACHE_KEY] = (owner, projects)
    return projects


def invalidate_projects() -> None:
    """Force the next get_projects() to read storage (after create/update/delete)."""
    st.session_state.pop(PROJECTS_CACHE_KEY, None)
