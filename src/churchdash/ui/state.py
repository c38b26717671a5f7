"""Session-state helpers for the Streamlit UI.

No ORM, no DB: only reads/writes ``st.session_state``.
"""
import streamlit as st
from typing import Any, Optional


def init_session() -> None:
    """Initialize session state variables."""
    st.session_state.setdefault("selected_members", set())
    st.session_state.setdefault("claims", None)
    st.session_state.setdefault("last_saved_service", None)


def get_claims() -> Optional[dict[str, Any]]:
    """Session claims forwarded to the API for admin checks."""
    return st.session_state.get("claims")


def set_claims(claims: Optional[dict[str, Any]]) -> None:
    st.session_state["claims"] = claims


def get_selected() -> set[int]:
    return st.session_state.setdefault("selected_members", set())


def set_selected(member_ids: set[int]) -> None:
    st.session_state["selected_members"] = set(member_ids)


def present_key(member_id: int) -> str:
    """Session key of a member's "present" checkbox."""
    return f"present_{member_id}"


def sync_present(member_id: int) -> None:
    """Checkbox ``on_change``: mirror the widget into the selection."""
    selected = get_selected()
    if st.session_state.get(present_key(member_id)):
        selected.add(member_id)
    else:
        selected.discard(member_id)


def toggle_filtered(member_ids: list[int]) -> None:
    """Select every id in *member_ids*, or clear them if all are selected.

    Runs as a button callback, so the checkbox keys can still be written.
    """
    selected = get_selected()
    select = any(i not in selected for i in member_ids)
    for member_id in member_ids:
        st.session_state[present_key(member_id)] = select
        if select:
            selected.add(member_id)
        else:
            selected.discard(member_id)


def clear_selected() -> None:
    """Untick everything. Call before any checkbox is drawn in the run."""
    for member_id in get_selected():
        st.session_state[present_key(member_id)] = False
    set_selected(set())


def set_last_saved(service_date: str, weekday: str) -> None:
    st.session_state["last_saved_service"] = (service_date, weekday)


def get_last_saved() -> Optional[tuple[str, str]]:
    return st.session_state.get("last_saved_service")
