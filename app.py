"""
Streamlit entrypoint for the Profitability Calculator.
- Sidebar: account (optional cloud sync) and the project list
- Main screen: calculator for the current snapshot, save / rename controls
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root to Python path FIRST
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import streamlit as st

from calculator.ui.auth_panel import render_auth_panel
from calculator.ui.calculator_view import render_calculator
from calculator.ui.project_sidebar import render_project_actions, render_project_sidebar
from calculator.ui.session import get_active_project_id, get_project_name, get_projects, open_project
from services import project_store
from services.auth import SupabaseAuth
from services.utils import get_logger

logger = get_logger("app")

# -----------------------------------------------------------------------------
# Page setup
# -----------------------------------------------------------------------------
st.set_page_config(page_title="Profitability Calculator", layout="wide")

# -----------------------------------------------------------------------------
# Account + projects (sidebar)
# -----------------------------------------------------------------------------
if "auth" not in st.session_state:
    st.session_state.auth = SupabaseAuth()

session = render_auth_panel(st.session_state.auth)

# Reopen the last active project once per browser session / account
restore_marker = session.user_id if session else "local"
if st.session_state.get("restored_for") != restore_marker:
    st.session_state.restored_for = restore_marker
    last_id = project_store.get_active_project_id(session)
    if last_id and not get_active_project_id():
        project = next((p for p in get_projects(session) if p.id == last_id), None)
        if project is not None:
            logger.info("Reopening project %s", project.id)
            open_project(project)

render_project_sidebar(session)

# -----------------------------------------------------------------------------
# Calculator
# -----------------------------------------------------------------------------
st.title(f"📐 {get_project_name()}" if get_active_project_id() else "📐 Profitability Calculator")
render_project_actions(session)
st.markdown("---")

render_calculator()
