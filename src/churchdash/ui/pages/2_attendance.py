import streamlit as st
from churchdash.ui.api_client import get_client, APIError
from churchdash.ui import state
from churchdash.api.schemas.members import MemberUpdate, VisitorCreate
from churchdash.domain.service_date import DECLARED_FREQUENCIES

st.title("Attendance")
state.init_session()
if st.session_state.pop("clear_selection", False):
    state.clear_selected()

client = get_client()

try:
    service = client.get_service()
except APIError as e:
    st.error(f"Failed to resolve the current service: {e.detail}")
    st.stop()

st.caption(f"Detected automatically: {service.weekday_label} service ({service.service_date})")

last_saved = state.get_last_saved()
if last_saved:
    st.caption(f"✅ Last saved: {last_saved[1]} {last_saved[0]}")

# --- Toolbar ---
t1, t2 = st.columns(2)
with t1:
    if st.button("Prepare CSV export"):
        try:
            filename, content = client.export_attendance()
            if not content:
                st.info("No attendance recorded in the last 60 days.")
            else:
                st.download_button("Download CSV", content, file_name=filename, mime="text/csv")
        except APIError as e:
            st.error(f"Export failed: {e.detail}")

with t2:
    with st.expander("Add visitor", expanded=False):
        with st.form("add_visitor"):
            name = st.text_input("Name (required)")
            person_id = st.text_input("National ID (optional)")
            frequency = st.selectbox("Declared frequency", DECLARED_FREQUENCIES,
                                     index=DECLARED_FREQUENCIES.index("occasional"))
            kind = st.radio("Type", ["visitor", "member"], horizontal=True)
            if st.form_submit_button("Save"):
                try:
                    payload = VisitorCreate(
                        name=name, person_id=person_id or None,
                        declared_frequency=frequency, registration_type=kind,
                    )
                except ValueError as e:
                    st.error(str(e))
                else:
                    try:
                        client.register_visitor(payload)
                        st.success(f"Registered {payload.name}.")
                        st.rerun()
                    except APIError as e:
                        st.error(f"Could not save the visitor: {e.detail}")

# --- Alerts ---
try:
    alerts = client.absence_alerts()
except APIError as e:
    alerts = None
    st.warning(f"Could not load alerts: {e.detail}")

if alerts and alerts.items:
    st.subheader("Automatic alerts")
    for alert in alerts.items[:5]:
        with st.container(border=True):
            st.write(f"**{alert.name}** · {alert.declared_frequency}")
            st.caption(alert.detail)
    if alerts.total > 5:
        st.caption(f"{alerts.total - 5} more alert(s).")

st.divider()

# --- Member list ---
def _save_frequency(member_id: int) -> None:
    key = f"freq_{member_id}"
    try:
        client.update_member(member_id, MemberUpdate(declared_frequency=st.session_state[key]))
        st.toast("Frequency updated")
    except APIError as e:
        del st.session_state[key]  # redraw with the stored value
        st.session_state["frequency_error"] = f"Could not update the frequency: {e.detail}"
    except ValueError:
        del st.session_state[key]
        st.session_state["frequency_error"] = "Pick one of the listed frequencies."


search = st.text_input("Search by name, ID or frequency")
try:
    members = client.list_members(q=search or None)
except APIError as e:
    st.error(f"Failed to load members: {e.detail}")
    st.stop()

selected = state.get_selected()
ids = [m.id for m in members.items]

c1, c2 = st.columns([1, 3])
c1.button("Select results", key="select_results", disabled=not ids,
          on_click=state.toggle_filtered, args=(ids,))
c2.write(f"{members.total} active people · {len(selected)} marked present")

frequency_error = st.session_state.pop("frequency_error", None)
if frequency_error:
    st.error(frequency_error)

if not members.items:
    st.info("No people match the search.")

for m in members.items:
    with st.container(border=True):
        a, b, c = st.columns([4, 3, 2])
        present = state.present_key(m.id)
        st.session_state.setdefault(present, m.id in selected)
        a.checkbox(m.name, key=present, on_change=state.sync_present, args=(m.id,))
        last = m.last_attendance.isoformat() if m.last_attendance else "No records"
        a.caption(f"ID: {m.person_id} · Last attendance: {last} · {m.registration_type.value}")

        options = DECLARED_FREQUENCIES
        if m.declared_frequency not in options:
            options = [m.declared_frequency, *DECLARED_FREQUENCIES]
        b.selectbox(
            "Declared frequency", options,
            index=options.index(m.declared_frequency),
            key=f"freq_{m.id}",
            on_change=_save_frequency, args=(m.id,),
        )

        if c.button("History", key=f"hist_{m.id}"):
            try:
                history = client.member_history(m.id)
                if not history.items:
                    c.caption("No records to show.")
                for row in history.items:
                    c.caption(f"{row.service_date} · {row.service_weekday} · {'✔' if row.attended else '✘'}")
            except APIError as e:
                c.error(f"Failed to load history: {e.detail}")

st.divider()
if st.button(f"Save attendance ({len(selected)} selected)", key="save_attendance",
             type="primary", disabled=not selected):
    try:
        result = client.save_attendance(sorted(selected))
        st.session_state["clear_selection"] = True
        state.set_last_saved(result.service_date.isoformat(), result.weekday.label)
        st.rerun()
    except APIError as e:
        if e.is_conflict:
            st.error("Already recorded for this person.")
        elif e.status_code == 403:
            st.error("Only church administrators can register attendance.")
        else:
            st.error(f"Could not save: {e.detail}")
