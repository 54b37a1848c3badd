"""
Project Sidebar UI Component
============================

Lists saved projects with their revenue and profit, and handles
create / open / save / rename / delete.
"""

from __future__ import annotations
from typing import Optional
import streamlit as st

from calculator.calculators import compute
from calculator.defaults import initial_state
from calculator.formatting import format_date, format_pct, format_uah
from calculator.models import Project
from services import project_store
from services.auth import Session
from .session import (
    close_project,
    get_active_project_id,
    get_project_name,
    get_projects,
    get_state,
    invalidate_projects,
    open_project,
)

DEFAULT_PROJECT_NAME = "Partitions"


def render_project_sidebar(session: Optional[Session]) -> None:
    """Render the project list in the sidebar."""
    st.sidebar.markdown("### Projects")

    with st.sidebar.form("new_project_form", clear_on_submit=True):
        name = st.text_input("New project name", value=DEFAULT_PROJECT_NAME)
        if st.form_submit_button("+ New", use_container_width=True):
            project = project_store.create_project(session, name, initial_state())
            invalidate_projects()
            open_project(project)
            st.toast("Project created!", icon="✅")
            st.rerun()

    projects = get_projects(session)
    _show_storage_warning(session)

    if not projects:
        st.sidebar.caption("Create your first project")
        return

    for project in projects:
        _render_project_card(session, project)


def _render_project_card(session: Optional[Session], project: Project) -> None:
    computed = compute(project.state)
    is_active = project.id == get_active_project_id()

    box = st.sidebar.container(border=True)
    title = f"▶ {project.name}" if is_active else project.name
    box.markdown(f"**{title}**")
    box.caption(
        f"Revenue: {format_uah(computed.revenue)}  \n"
        f"Profit: {format_uah(computed.profit_amount)} ({format_pct(computed.profit_percent)})  \n"
        f"Updated: {format_date(project.updated_at)}"
    )

    c_open, c_del = box.columns(2)
    if c_open.button("Open", key=f"open_{project.id}", disabled=is_active, use_container_width=True):
        open_project(project)
        project_store.set_active_project_id(session, project.id)
        st.rerun()

    confirm = box.checkbox("Confirm delete", key=f"confirm_del_{project.id}")
    if c_del.button("Delete", key=f"del_{project.id}", disabled=not confirm, use_container_width=True):
        project_store.delete_project(session, project.id)
        invalidate_projects()
        if is_active:
            close_project()
        st.toast(f"Project \"{project.name}\" deleted", icon="🗑️")
        st.rerun()


def render_project_actions(session: Optional[Session]) -> None:
    """Save / rename controls for the calculation on screen."""
    active_id = get_active_project_id()

    if active_id:
        name = st.text_input("Project name", value=get_project_name(), key=f"rename_{active_id}")
    else:
        name = st.text_input("Save as", value=DEFAULT_PROJECT_NAME, key="save_as_input")

    c_save, c_close = st.columns([1, 1])
    with c_save:
        label = "Save" if active_id else "Save as new"
        if st.button(label, type="primary", use_container_width=True):
            _save(session, active_id, name)
    with c_close:
        if active_id and st.button("Close project", use_container_width=True):
            close_project()
            project_store.set_active_project_id(session, None)
            st.rerun()


def _save(session: Optional[Session], active_id: Optional[str], name: str) -> None:
    try:
        if active_id:
            project = project_store.update_project(session, active_id, name=name, state=get_state())
            if project is None:
                st.error("Project no longer exists. Save it as a new project.")
                close_project()
                return
            st.toast("Project updated!", icon="✅")
        else:
            project = project_store.create_project(session, name, get_state())
            st.toast("Project saved!", icon="✅")
    except OSError as e:
        st.error(f"Could not save project: {e}")
        return
    finally:
        invalidate_projects()

    open_project(project)
    _show_storage_warning(session)


def _show_storage_warning(session: Optional[Session]) -> None:
    warning = project_store.get_last_warning(session)
    if warning:
        st.sidebar.warning(warning)
