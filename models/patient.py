# models/patient.py

from dataclasses import dataclass

from models.record import JsonRecord


@dataclass
class Patient(JsonRecord):
    JSON_KEYS = {"health_info": "healthInfo"}

    # Store-generated identifier (p1, p1720000000000...)
    id: str
    name: str = ""

    # ISO date, e.g. 2001-05-10
    dob: str = ""

    # Contact details
    contact: str = ""
    email: str = ""
    address: str = ""

    # Free-text allergies / conditions
    health_info: str = ""

    def __repr__(self):
        return f"<Patient {self.id} - {self.name}>"
