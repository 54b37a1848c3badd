"""Sign-in panel (sidebar)."""

from __future__ import annotations
from typing import Optional
import streamlit as st

from services.auth import AuthError, Session, SupabaseAuth
from .session import AUTH_SESSION_KEY, close_project


def get_session() -> Optional[Session]:
    return st.session_state.get(AUTH_SESSION_KEY)


def render_auth_panel(auth: SupabaseAuth) -> Optional[Session]:
    """
    Render sign-in / sign-out controls.

    Returns:
        The active session, or None when working locally
    """
    st.sidebar.markdown("### Account")

    if not auth.is_available():
        st.sidebar.caption("Cloud sync is not configured. Projects are saved on this device.")
        return None

    session = get_session()
    if session is not None:
        st.sidebar.success(f"🟢 {session.email}")
        if st.sidebar.button("Sign out", use_container_width=True, key="sign_out_btn"):
            try:
                auth.sign_out(session)
            except AuthError as e:
                st.sidebar.error(f"Sign-out error: {e}")
            st.session_state[AUTH_SESSION_KEY] = None
            close_project()
            st.rerun()
        return session

    email = st.sidebar.text_input("Email", key="auth_email")
    password = st.sidebar.text_input("Password", type="password", placeholder="••••••••", key="auth_pw")
    c_in, c_up = st.sidebar.columns(2)

    if c_in.button("Sign in", use_container_width=True, key="sign_in_btn"):
        try:
            st.session_state[AUTH_SESSION_KEY] = auth.sign_in(email, password)
        except AuthError as e:
            st.sidebar.error(f"❌ {e}")
        else:
            close_project()
            st.rerun()

    if c_up.button("Sign up", use_container_width=True, key="sign_up_btn"):
        try:
            new_session = auth.sign_up(email, password)
        except AuthError as e:
            st.sidebar.error(f"❌ {e}")
        else:
            if new_session is None:
                st.sidebar.info("Check your inbox to confirm the account, then sign in.")
            else:
                st.session_state[AUTH_SESSION_KEY] = new_session
                close_project()
                st.rerun()

    st.sidebar.caption("Not signed in: projects are saved on this device.")
    return None
