import streamlit as st

from core.session_manager import require_role, get_records
from core.helpers import render_admin_sidebar, format_datetime, format_money, status_label
from core.time_utils import now_local
from services.analytics import compute_kpis, upcoming_appointments, top_patients


# ----------------------------------------------
# MAIN PAGE
# ----------------------------------------------
def main():
    require_role("Admin")
    render_admin_sidebar()

    st.title("Dashboard")
    st.caption(f"Last updated: {now_local().strftime('%b %d, %Y %I:%M %p')}")

    records = get_records()
    patients = records.patients
    incidents = records.incidents
    names = {p.id: p.name for p in patients}

    kpis = compute_kpis(patients, incidents)

    st.subheader("Overview")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Patients", kpis["total_patients"])
    c2.metric("Total Revenue", format_money(kpis["total_revenue"]))
    c3.metric("Completed Treatments", kpis["completed"])
    c4.metric("Pending Treatments", kpis["pending"])

    st.divider()

    left, right = st.columns(2)

    with left:
        upcoming = upcoming_appointments(incidents)
        st.subheader("Upcoming Appointments")
        st.caption(f"{len(upcoming)} scheduled")
        if not upcoming:
            st.info("No upcoming appointments")
        for appt in upcoming:
            with st.container(border=True):
                st.write(f"**{appt.title}** — {names.get(appt.patient_id, 'Unknown patient')}")
                st.caption(format_datetime(appt.appointment_date))
                if appt.cost:
                    st.write(format_money(appt.cost))

    with right:
        st.subheader("Top Patients")
        st.caption("By visits")
        for rank, row in enumerate(top_patients(patients, incidents), start=1):
            with st.container(border=True):
                st.write(f"**{rank}. {row['patient'].name}**")
                st.caption(f"{row['visits']} visits • {format_money(row['total_spent'])}")

    st.divider()

    st.subheader("Treatment Statistics")
    cols = st.columns(len(kpis["by_status"]))
    for col, (status, count) in zip(cols, kpis["by_status"].items()):
        col.metric(status_label(status), count)


if __name__ == "__main__":
    main()
