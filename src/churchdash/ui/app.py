"""Streamlit entry point: ``streamlit run src/churchdash/ui/app.py``."""
import json

import streamlit as st

from churchdash.ui.api_client import reset_client
from churchdash.ui.state import get_claims, init_session, set_claims
from churchdash.ui.validation import run_all_checks

st.set_page_config(page_title="Church Attendance", page_icon="⛪", layout="wide")
init_session()

st.title("Church Attendance Dashboard")
st.write(
    "Use **Dashboard** for roster statistics, **Attendance** to register who came "
    "to the current service, and **Roster** to browse the spreadsheet."
)

errors = run_all_checks()
if errors:
    for msg in errors:
        st.error(msg)
else:
    st.success("Backend reachable.")

with st.sidebar:
    st.subheader("Session")
    current = get_claims()
    raw = st.text_area(
        "Session claims (JSON)",
        value=json.dumps(current) if current else "",
        help="Forwarded to the API. Admin actions need an 'admin' role.",
    )
    if st.button("Apply"):
        try:
            set_claims(json.loads(raw) if raw.strip() else None)
            reset_client()
            st.success("Session updated.")
        except json.JSONDecodeError as e:
            st.error(f"Invalid JSON: {e}")
