# models/user.py

from dataclasses import dataclass

from models.record import JsonRecord

ADMIN = "Admin"
PATIENT = "Patient"


@dataclass
class User(JsonRecord):
    JSON_KEYS = {"patient_id": "patientId"}

    id: str
    role: str
    email: str

    # Plaintext, compared exactly. Production use would need hashed credentials.
    password: str

    # Only set for Patient-role identities
    patient_id: str | None = None

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
