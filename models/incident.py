# models/incident.py

from dataclasses import dataclass, field

from models.record import JsonRecord

STATUSES = ("Scheduled", "Completed", "Cancelled", "Pending")


@dataclass
class FileAttachment(JsonRecord):
    name: str
    # Self-contained data URL (data:<mime>;base64,...)
    url: str
    type: str = "application/octet-stream"

    @classmethod
    def coerce(cls, value):
        if isinstance(value, cls):
            return value
        return cls.from_dict(value)


@dataclass
class Incident(JsonRecord):
    JSON_KEYS = {
        "patient_id": "patientId",
        "appointment_date": "appointmentDate",
        "next_appointment_date": "nextAppointmentDate",
    }

    id: str

    # Link to patient (not validated against the patient collection)
    patient_id: str = ""

    title: str = ""
    description: str = ""
    comments: str = ""

    # ISO datetime, e.g. 2025-07-08T10:00:00
    appointment_date: str = ""

    # Workflow status; any status may be set from any other
    status: str = "Scheduled"

    # Filled in on completion
    cost: float | None = None
    treatment: str | None = None

    # Informational only, no follow-up incident is created
    next_appointment_date: str | None = None

    files: list = field(default_factory=list)

    def __post_init__(self):
        self.files = [FileAttachment.coerce(f) for f in (self.files or [])]

    def _dump_value(self, name, value):
        if name == "files":
            return [f.to_dict() for f in value]
        return value

    def __repr__(self):
        return f"<Incident {self.id} for Patient {self.patient_id}>"
