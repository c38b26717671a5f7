import pandas as pd
import streamlit as st
from churchdash.config import settings
from churchdash.ui.api_client import get_client, APIError

st.title("Dashboard")

client = get_client()


def _load():
    """Re-fetch the roster; fall back to the cached snapshot if the fetch fails."""
    try:
        return client.refresh_roster()
    except APIError as e:
        st.warning(f"Could not reload the roster: {e.detail}. Showing the last snapshot.")
    return client.get_roster()


def _frame(buckets, label: str) -> pd.DataFrame:
    return pd.DataFrame(
        [{label: b.label, "count": b.count} for b in buckets], columns=[label, "count"],
    ).set_index(label)


@st.fragment(run_every=settings.DASHBOARD_REFRESH_SECONDS)
def dashboard() -> None:
    try:
        snapshot = _load()
        birthdays = client.get_birthdays()
    except APIError as e:
        st.error(f"Failed to load dashboard: {e.detail}")
        return
    metrics = snapshot.metrics

    top, button = st.columns([4, 1])
    top.caption(
        f"Last updated: {snapshot.loaded_at:%Y-%m-%d %H:%M:%S} UTC · "
        f"refreshes every {settings.DASHBOARD_REFRESH_SECONDS} s"
    )
    button.button("Refresh now")

    # --- KPIs ---
    st.metric("Active members", metrics.active_members, delta=f"{round(metrics.active_share)}% of total")

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total members", metrics.total_members)
    c2.metric("In groups", metrics.group_participants, delta=f"{round(metrics.group_share)}%")
    c3.metric("Technology access", f"{round(metrics.technology_access_rate)}%")
    c4.metric("Own transport", metrics.with_transport)
    st.caption(f"New members: {metrics.new_members}")

    st.divider()

    left, right = st.columns(2)
    with left:
        st.subheader("Gender")
        st.bar_chart(pd.DataFrame(
            {"count": [metrics.gender.male, metrics.gender.female]},
            index=["Male", "Female"],
        ))
        st.subheader("Communes")
        st.bar_chart(_frame(metrics.communes[:6], "commune"))
        st.subheader("Ministries")
        st.bar_chart(_frame(metrics.ministries, "ministry"))
    with right:
        st.subheader("Age")
        st.bar_chart(_frame(metrics.age_ranges, "range"))
        st.subheader("Regular attendance")
        st.dataframe(_frame(metrics.attendance_frequency, "days"))
        st.subheader("Time attending")
        st.dataframe(_frame(metrics.tenure, "tenure"))

    st.divider()

    # --- Birthdays ---
    st.subheader("Birthdays this week")
    if not birthdays.items:
        st.info("No birthdays this week.")
    for b in birthdays.items:
        day_month = "/".join(b.birth_date.split("/")[:2])
        suffix = " (today)" if b.is_past else ""
        st.write(f"🎂 **{b.name}**: {b.weekday}{suffix}, {day_month}, turns {b.age + 1}")


dashboard()
