import streamlit as st
from datetime import datetime, time

from core.session_manager import require_role, get_records
from core.helpers import render_admin_sidebar, format_datetime, format_money, status_label
from core.time_utils import now_local, try_parse_datetime, to_iso
from models.incident import STATUSES
from services.analytics import filter_incidents
from services.attachments import encode_uploaded_file


def _datetime_inputs(label: str, key: str, value: str | None, optional: bool = False):
    """Date + time pickers; returns an ISO string or None."""
    current = try_parse_datetime(value)
    enabled = True
    if optional:
        enabled = st.checkbox(f"Set {label.lower()}", value=current is not None, key=f"{key}_on")
    c1, c2 = st.columns(2)
    default = current or now_local().replace(minute=0, second=0, microsecond=0)
    d = c1.date_input(label, value=default.date(), key=f"{key}_date")
    t = c2.time_input("Time", value=default.time() if current else time(10, 0), key=f"{key}_time")
    # Widgets inside a form only report on submit, so the pickers always render
    if not enabled:
        return None
    return to_iso(datetime.combine(d, t))


def _incident_form(key: str, patients, incident=None):
    """Render the add/edit form; returns (fields, uploads) when submitted."""
    ids = [p.id for p in patients]
    names = {p.id: p.name for p in patients}

    with st.form(key):
        c1, c2 = st.columns(2)
        patient_id = c1.selectbox(
            "Patient *",
            ids,
            index=ids.index(incident.patient_id) if incident and incident.patient_id in ids else 0,
            format_func=lambda pid: names.get(pid, pid),
            key=f"{key}_patient",
        )
        title = c2.text_input("Appointment Title *", value=incident.title if incident else "", key=f"{key}_title")
        appointment_date = _datetime_inputs(
            "Appointment Date", f"{key}_appt", incident.appointment_date if incident else None
        )
        c3, c4 = st.columns(2)
        status = c3.selectbox(
            "Status",
            STATUSES,
            index=STATUSES.index(incident.status) if incident and incident.status in STATUSES else 0,
            key=f"{key}_status",
        )
        cost = c4.number_input(
            "Cost ($)", min_value=0.0, step=1.0,
            value=float(incident.cost) if incident and incident.cost is not None else None,
            key=f"{key}_cost",
        )
        next_date = _datetime_inputs(
            "Next Appointment", f"{key}_next",
            incident.next_appointment_date if incident else None, optional=True,
        )
        description = st.text_area("Description", value=incident.description if incident else "", key=f"{key}_description")
        comments = st.text_area("Comments", value=incident.comments if incident else "", key=f"{key}_comments")
        treatment = st.text_area("Treatment", value=(incident.treatment or "") if incident else "", key=f"{key}_treatment")
        uploads = st.file_uploader("Attachments", accept_multiple_files=True, key=f"{key}_files")
        submitted = st.form_submit_button("Save Appointment" if incident else "Add Appointment")

    if not submitted:
        return None, None
    if not title.strip():
        st.error("Appointment title is required.")
        return None, None

    fields = {
        "patient_id": patient_id,
        "title": title.strip(),
        "appointment_date": appointment_date,
        "status": status,
        "cost": cost,
        "next_appointment_date": next_date,
        "description": description.strip(),
        "comments": comments.strip(),
        "treatment": treatment.strip() or None,
    }
    return fields, [encode_uploaded_file(f) for f in uploads or []]


def main():
    require_role("Admin")
    render_admin_sidebar()

    st.title("Appointment Management")
    st.caption("Manage patient appointments and treatments.")

    records = get_records()
    patients = records.patients
    names = {p.id: p.name for p in patients}

    if patients:
        with st.expander("➕ Add New Appointment", expanded=False):
            fields, uploads = _incident_form("add_incident_form", patients)
            if fields:
                incident = records.add_incident(**fields, files=uploads)
                st.success(f"Appointment created! ID: {incident.id}")
                st.rerun()
    else:
        st.info("Add a patient before scheduling appointments.")

    c1, c2 = st.columns([3, 1])
    q = c1.text_input("Search", placeholder="Search by patient name, title or description...").strip()
    status_filter = c2.selectbox("Status", ["All", *STATUSES])

    incidents = filter_incidents(records.incidents, patients, q, status_filter)

    if not incidents:
        st.info("No appointments found.")
        return

    for inc in incidents:
        with st.container(border=True):
            left, right = st.columns([3, 2])
            with left:
                st.write(f"**{inc.title}**  —  {names.get(inc.patient_id, 'Unknown patient')}")
                st.caption(f"{format_datetime(inc.appointment_date)} • {status_label(inc.status)}")
                if inc.description:
                    st.write(inc.description)
                if inc.comments:
                    st.caption(f"Comments: {inc.comments}")
            with right:
                st.write(f"Cost: **{format_money(inc.cost)}**")
                if inc.treatment:
                    st.write(f"Treatment: {inc.treatment}")
                if inc.next_appointment_date:
                    st.caption(f"Next: {format_datetime(inc.next_appointment_date)}")

            if inc.files:
                st.write("Attachments:")
                for idx, f in enumerate(inc.files):
                    fc1, fc2 = st.columns([4, 1])
                    fc1.caption(f"📎 {f.name} ({f.type})")
                    if fc2.button("Remove", key=f"rm_{inc.id}_{idx}"):
                        records.remove_incident_file(inc.id, idx)
                        st.rerun()

            with st.expander("✏️ Edit Appointment", expanded=False):
                fields, uploads = _incident_form(f"edit_incident_{inc.id}", patients, inc)
                if fields:
                    # Existing attachments are kept, new uploads appended
                    records.update_incident(inc.id, **fields, files=[*inc.files, *uploads])
                    st.success("Appointment updated.")
                    st.rerun()

            if st.button("🗑️ Delete Appointment", key=f"delete_{inc.id}"):
                if records.delete_incident(inc.id):
                    st.success(f"Deleted appointment {inc.title}.")
                    st.rerun()
                else:
                    st.error("Failed to delete appointment.")


if __name__ == "__main__":
    main()
