import streamlit as st
from datetime import date

from core.session_manager import require_role, get_records
from core.helpers import render_admin_sidebar
from core.time_utils import try_parse_date
from services.analytics import search_patients, calculate_age, upcoming_appointments


def _patient_form(key: str, patient=None):
    """Render the add/edit form; returns the field dict when submitted."""
    with st.form(key):
        c1, c2 = st.columns(2)
        name = c1.text_input("Full Name *", value=patient.name if patient else "", key=f"{key}_name")
        dob = c2.date_input(
            "Date of Birth *",
            value=(try_parse_date(patient.dob) if patient else None) or date(2000, 1, 1),
            min_value=date(1900, 1, 1),
            max_value=date.today(),
            key=f"{key}_dob",
        )
        contact = c1.text_input("Contact *", value=patient.contact if patient else "", key=f"{key}_contact")
        email = c2.text_input("Email", value=patient.email if patient else "", key=f"{key}_email")
        address = st.text_input("Address", value=patient.address if patient else "", key=f"{key}_address")
        health_info = st.text_area("Health Information", value=patient.health_info if patient else "", key=f"{key}_health")
        submitted = st.form_submit_button("Save Patient" if patient else "Add Patient")

    if not submitted:
        return None
    if not name.strip() or not contact.strip():
        st.error("Name and contact are required.")
        return None
    return {
        "name": name.strip(),
        "dob": dob.isoformat(),
        "contact": contact.strip(),
        "email": email.strip(),
        "address": address.strip(),
        "health_info": health_info.strip(),
    }


def main():
    require_role("Admin")
    render_admin_sidebar()

    st.title("Patient Management")
    st.caption("Manage patient records and information.")

    records = get_records()

    with st.expander("➕ Add New Patient", expanded=False):
        fields = _patient_form("add_patient_form")
        if fields:
            patient = records.add_patient(**fields)
            st.success(f"Patient created! ID: {patient.id}")
            st.rerun()

    q = st.text_input("Search", placeholder="Search patients by name, email, or phone...").strip()
    patients = search_patients(records.patients, q)

    if not patients:
        st.info("No patients found.")
        return

    for p in patients:
        appointments = records.get_patient_incidents(p.id)
        upcoming = upcoming_appointments(appointments, limit=None)
        completed = [a for a in appointments if a.status == "Completed"]

        with st.container(border=True):
            left, right = st.columns([3, 2])
            with left:
                st.write(f"**{p.name}**  —  {p.id}")
                age = calculate_age(p.dob)
                age = "—" if age is None else age
                st.caption(f"Age: {age} • {p.contact} • {p.email or '—'}")
                if p.address:
                    st.caption(p.address)
                if p.health_info:
                    st.write(f"Health info: {p.health_info}")
            with right:
                st.write(f"Total visits: **{len(appointments)}**")
                st.write(f"Upcoming: **{len(upcoming)}** • Completed: **{len(completed)}**")

            with st.expander("✏️ Edit Patient Info", expanded=False):
                fields = _patient_form(f"edit_patient_{p.id}", p)
                if fields:
                    if records.update_patient(p.id, **fields):
                        st.success("Patient info updated.")
                        st.rerun()
                    else:
                        st.error("Failed to update patient.")

            with st.expander("🗑️ Delete Patient", expanded=False):
                st.warning("Deleting a patient will remove all their appointments. This cannot be undone.")
                confirm = st.text_input("Type DELETE to confirm", value="", key=f"confirm_{p.id}")
                if st.button("Delete Patient", key=f"delete_{p.id}", help="Irreversible action"):
                    if confirm.strip().upper() != "DELETE":
                        st.error("Confirmation text does not match DELETE.")
                    elif records.delete_patient(p.id):
                        st.success("Patient deleted.")
                        st.rerun()
                    else:
                        st.error("Failed to delete patient.")


if __name__ == "__main__":
    main()
