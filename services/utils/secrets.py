"""Configuration lookup: environment first, then Streamlit secrets."""

from __future__ import annotations
import os
from typing import Optional


def get_secret(name: str, default: Optional[str] = None) -> Optional[str]:
    """Get setting from environment or Streamlit secrets."""
    value = os.environ.get(name)
    if value:
        return value
    try:
        import streamlit as st
        value = st.secrets.get(name)
    except Exception:
        # No secrets.toml outside a Streamlit run
        value = None
    return str(value) if value else default


def is_flag_set(name: str) -> bool:
    return (get_secret(name) or "").strip() in ("1", "true", "True")
