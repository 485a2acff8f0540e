"""Demo dataset written the first time a storage key is found empty."""

from models.patient import Patient
from models.incident import Incident
from models.user import User, ADMIN, PATIENT


def demo_patients():
    return [
        Patient(
            id="p1",
            name="AnilReddy",
            dob="2001-05-10",
            contact="8767854321",
            email="anil@entnt.in",
            health_info="No allergies",
            address="btm, bangalore",
        ),
        Patient(
            id="p2",
            name="reshu",
            dob="1985-08-15",
            contact="9877865091",
            email="reshu@entnt.in",
            health_info="Allergic to penicillin",
            address="nagavara, bangalore",
        ),
    ]


def demo_incidents():
    return [
        Incident(
            id="i1",
            patient_id="p1",
            title="Routine Cleaning",
            description="Regular dental cleaning and checkup",
            comments="Good oral hygiene",
            appointment_date="2025-07-08T10:00:00",
            cost=120,
            treatment="Professional cleaning, fluoride treatment",
            status="Scheduled",
        ),
        Incident(
            id="i2",
            patient_id="p1",
            title="Toothache Treatment",
            description="Upper molar pain treatment",
            comments="Sensitive to cold",
            appointment_date="2025-07-01T10:00:00",
            cost=280,
            treatment="Root canal therapy",
            status="Completed",
            next_appointment_date="2025-07-15T14:00:00",
        ),
        Incident(
            id="i3",
            patient_id="p2",
            title="Dental Implant Consultation",
            description="Consultation for dental implant",
            comments="Missing tooth replacement",
            appointment_date="2025-07-10T15:00:00",
            status="Scheduled",
        ),
    ]


def demo_users():
    return [
        User(id="1", role=ADMIN, email="admin@entnt.in", password="admin123"),
        User(id="2", role=PATIENT, email="john@entnt.in", password="patient123", patient_id="p1"),
        User(id="3", role=PATIENT, email="jane@entnt.in", password="patient123", patient_id="p2"),
    ]
