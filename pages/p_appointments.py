import streamlit as st

from core.session_manager import require_role, get_records, get_current_user
from core.helpers import render_patient_sidebar, format_datetime, format_money, status_label
from models.incident import STATUSES
from services.analytics import patient_history, patient_summary
from services.attachments import decode_data_url


def main():
    require_role("Patient")
    render_patient_sidebar()

    user = get_current_user()
    records = get_records()

    if not records.get_patient(user.patient_id):
        st.error("Patient record not found.")
        return

    incidents = records.get_patient_incidents(user.patient_id)
    summary = patient_summary(incidents, user.patient_id)

    st.title("My Appointments")

    c1, c2, c3 = st.columns(3)
    c1.metric("Upcoming", summary["upcoming"])
    c2.metric("Completed", summary["completed"])
    c3.metric("Total Spent", format_money(summary["total_spent"]))

    status_filter = st.selectbox("Status", ["All", *STATUSES])
    history = patient_history(incidents, user.patient_id, status=status_filter)

    if not history:
        st.info("No appointments found.")
        return

    for v in history:
        with st.container(border=True):
            st.write(f"### {v.title}")
            st.write(f"- **Date:** {format_datetime(v.appointment_date)}")
            st.write(f"- **Status:** {status_label(v.status)}")
            if v.description:
                st.write(f"- **Description:** {v.description}")
            if v.treatment:
                st.write(f"- **Treatment:** {v.treatment}")
            if v.cost is not None:
                st.write(f"- **Cost:** {format_money(v.cost)}")
            if v.next_appointment_date:
                st.write(f"- **Next Appointment:** {format_datetime(v.next_appointment_date)}")
            if v.comments:
                st.caption(v.comments)

            for idx, f in enumerate(v.files):
                try:
                    mime, data = decode_data_url(f.url)
                except ValueError:
                    st.caption(f"📎 {f.name} (unreadable attachment)")
                    continue
                st.download_button(
                    f"📎 Download {f.name}",
                    data=data,
                    file_name=f.name,
                    mime=f.type or mime,
                    key=f"dl_{v.id}_{idx}",
                )


if __name__ == "__main__":
    main()
