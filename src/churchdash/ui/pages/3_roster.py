import streamlit as st
from churchdash.ui.api_client import get_client, APIError

st.title("Roster")

client = get_client()

KINDS = {
    "Everyone": None,
    "Active": "active",
    "New": "new",
    "With transport": "transport",
    "Without transport": "no_transport",
    "In groups": "groups",
}

c1, c2 = st.columns([2, 1])
term = c1.text_input("Search by name or commune")
kind_label = c2.selectbox("Show", list(KINDS))

try:
    roster = client.list_roster_members(q=term or None, kind=KINDS[kind_label])
except APIError as e:
    st.error(f"Failed to load roster: {e.detail}")
    st.stop()

if not roster.items:
    st.info("No results found.")
    st.stop()

st.dataframe(
    [
        {
            "Name": m.name,
            "Age": m.age,
            "Commune": m.residence_area,
            "Attendance": m.attendance_days,
            "Transport": m.has_transport.value,
            "Ministries": ", ".join(m.ministries),
        }
        for m in roster.items
    ],
    use_container_width=True,
)
st.caption(f"{roster.total} member(s)")

with st.expander("Member detail"):
    name = st.selectbox("Member", [m.name for m in roster.items])
    member = next(m for m in roster.items if m.name == name)
    st.write(f"**{member.name}** · {member.gender} · {member.age} years")
    if member.phone:
        st.write(f"📞 {member.phone}")
    st.write(f"Address: {member.address or '—'} ({member.residence_area or '—'})")
    st.write(f"Ministries: {', '.join(member.ministries) or 'none'}")
    st.write(f"Transport: {member.has_transport.value} · Messaging app: {member.has_messaging_app.value}")
