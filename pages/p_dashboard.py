import streamlit as st

from core.session_manager import require_role, get_records, get_current_user
from core.helpers import render_patient_sidebar, format_datetime, format_money
from services.analytics import patient_summary, patient_history, calculate_age


def main():
    require_role("Patient")
    render_patient_sidebar()

    user = get_current_user()
    records = get_records()

    p = records.get_patient(user.patient_id)
    if not p:
        st.error("Patient record not found.")
        return

    incidents = records.get_patient_incidents(p.id)
    summary = patient_summary(incidents, p.id)

    st.title(f"Welcome, {p.name}")

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Visits", summary["total"])
    c2.metric("Upcoming", summary["upcoming"])
    c3.metric("Completed", summary["completed"])
    c4.metric("Total Spent", format_money(summary["total_spent"]))

    st.subheader("Your Profile")
    st.write(f"**Patient ID:** {p.id}")
    age = calculate_age(p.dob)
    if age is not None:
        st.write(f"**Age:** {age}")
    st.write(f"**Contact:** {p.contact or '—'}")
    st.write(f"**Email:** {p.email or '—'}")
    st.write(f"**Address:** {p.address or '—'}")
    st.write(f"**Health Information:** {p.health_info or '—'}")

    st.write("---")
    st.subheader("Next Appointment")
    nxt = summary["next_appointment"]
    if nxt:
        with st.container(border=True):
            st.write(f"**{nxt.title}**")
            st.caption(format_datetime(nxt.appointment_date))
            if nxt.description:
                st.write(nxt.description)
    else:
        st.info("No upcoming appointments scheduled.")

    st.write("---")
    st.subheader("Recent Treatments")
    completed = patient_history(incidents, p.id, status="Completed")[:5]
    if not completed:
        st.info("No completed treatments yet.")
    for t in completed:
        with st.container(border=True):
            st.write(f"**{t.title}** — {format_datetime(t.appointment_date)}")
            if t.treatment:
                st.caption(t.treatment)
            if t.cost:
                st.write(format_money(t.cost))

    if st.button("View All Appointments"):
        st.switch_page("pages/p_appointments.py")


if __name__ == "__main__":
    main()
