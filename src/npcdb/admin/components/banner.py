"""Page-level error banner shared by every section."""

from __future__ import annotations

import streamlit as st

ERROR_KEY = "admin_error"


def set_error(message: str) -> None:
    st.session_state[ERROR_KEY] = message


def clear_error() -> None:
    st.session_state.pop(ERROR_KEY, None)


def render_error_banner() -> None:
    message = st.session_state.get(ERROR_KEY)
    if not message:
        return
    col_msg, col_btn = st.columns([6, 1])
    with col_msg:
        st.error(message)
    with col_btn:
        if st.button("Dismiss", key="dismiss_error"):
            clear_error()
            st.rerun()
