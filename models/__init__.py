from .patient import Patient
from .incident import Incident, FileAttachment, STATUSES
from .user import User, ADMIN, PATIENT
from .storage_entry import StorageEntry

__all__ = [
    "Patient",
    "Incident",
    "FileAttachment",
    "STATUSES",
    "User",
    "ADMIN",
    "PATIENT",
    "StorageEntry",
]
