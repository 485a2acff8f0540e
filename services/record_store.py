"""
Record store for patients and incidents.

Holds both collections in memory and rewrites the whole affected collection
to storage after every mutation. Construct one per app session, call
``hydrate()`` once, then hand it to whatever needs it.
"""

import copy
import json
import logging
import time
from dataclasses import replace

from core.storage import PATIENTS_KEY, INCIDENTS_KEY
from models.patient import Patient
from models.incident import Incident, FileAttachment
from services.seed_data import demo_patients, demo_incidents

logger = logging.getLogger(__name__)


def load_collection(storage, key: str, model, seed):
    """Read a JSON array of records from storage.

    An absent key is seeded and written back. A payload that doesn't parse,
    or isn't a list of objects, is replaced by the seed as well.
    """
    raw = storage.get_item(key)
    if raw is None:
        records = seed()
        dump_collection(storage, key, records)
        return records

    try:
        data = json.loads(raw)
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise ValueError(f"expected a JSON array of objects, got {type(data).__name__}")
        return [model.from_dict(item) for item in data]
    except (ValueError, TypeError) as e:
        logger.warning("Stored %r is malformed (%s); reseeding demo data.", key, e)
        records = seed()
        dump_collection(storage, key, records)
        return records


def dump_collection(storage, key: str, records):
    storage.set_item(key, json.dumps([r.to_dict() for r in records]))


def _clean_fields(model, fields: dict) -> dict:
    allowed = set(model.attribute_names()) - {"id"}
    ignored = set(fields) - allowed
    if ignored:
        logger.debug("Ignoring unknown %s fields: %s", model.__name__, sorted(ignored))
    return {k: v for k, v in fields.items() if k in allowed}


class RecordStore:
    def __init__(self, storage, clock=time.time):
        self.storage = storage
        self._clock = clock
        self._patients: list[Patient] = []
        self._incidents: list[Incident] = []
        self._last_stamp = 0
        self._listeners = []
        self.hydrated = False

    # -----------------------------
    # Lifecycle
    # -----------------------------
    def hydrate(self):
        self._patients = load_collection(self.storage, PATIENTS_KEY, Patient, demo_patients)
        self._incidents = load_collection(self.storage, INCIDENTS_KEY, Incident, demo_incidents)
        self.hydrated = True
        logger.info(
            "Record store hydrated: %d patients, %d incidents",
            len(self._patients), len(self._incidents),
        )
        return self

    def reset(self):
        """Throw away both collections and start again from the demo seed."""
        self.storage.remove_item(PATIENTS_KEY)
        self.storage.remove_item(INCIDENTS_KEY)
        self.hydrate()
        self._notify(PATIENTS_KEY)
        self._notify(INCIDENTS_KEY)

    def add_listener(self, callback):
        """Register ``callback(key)``, called after each persisted change."""
        self._listeners.append(callback)

    def _notify(self, key):
        for callback in self._listeners:
            callback(key)

    def _save_patients(self):
        dump_collection(self.storage, PATIENTS_KEY, self._patients)
        self._notify(PATIENTS_KEY)

    def _save_incidents(self):
        dump_collection(self.storage, INCIDENTS_KEY, self._incidents)
        self._notify(INCIDENTS_KEY)

    def _new_id(self, prefix: str, taken) -> str:
        # Millisecond stamp, bumped so ids stay unique within the same millisecond
        stamp = max(int(self._clock() * 1000), self._last_stamp + 1)
        while f"{prefix}{stamp}" in taken:
            stamp += 1
        self._last_stamp = stamp
        return f"{prefix}{stamp}"

    # -----------------------------
    # Snapshots
    # -----------------------------
    @property
    def patients(self) -> tuple:
        return tuple(copy.deepcopy(p) for p in self._patients)

    @property
    def incidents(self) -> tuple:
        return tuple(copy.deepcopy(i) for i in self._incidents)

    def get_patient(self, patient_id: str):
        for p in self._patients:
            if p.id == patient_id:
                return copy.deepcopy(p)
        return None

    def get_incident(self, incident_id: str):
        for i in self._incidents:
            if i.id == incident_id:
                return copy.deepcopy(i)
        return None

    def get_patient_incidents(self, patient_id: str) -> list:
        return [copy.deepcopy(i) for i in self._incidents if i.patient_id == patient_id]

    # -----------------------------
    # Patients
    # -----------------------------
    def add_patient(self, **fields) -> Patient:
        patient_id = self._new_id("p", {p.id for p in self._patients})
        patient = Patient(id=patient_id, **_clean_fields(Patient, fields))
        self._patients = [*self._patients, patient]
        self._save_patients()
        logger.info("Added patient %s", patient_id)
        return copy.deepcopy(patient)

    def update_patient(self, patient_id: str, **fields):
        for idx, p in enumerate(self._patients):
            if p.id == patient_id:
                break
        else:
            logger.debug("update_patient: %s not found", patient_id)
            return None

        updated = replace(p, **_clean_fields(Patient, fields))
        self._patients = [*self._patients[:idx], updated, *self._patients[idx + 1:]]
        self._save_patients()
        return copy.deepcopy(updated)

    def delete_patient(self, patient_id: str) -> bool:
        """Remove a patient and every incident that references it."""
        remaining = [p for p in self._patients if p.id != patient_id]
        removed = len(remaining) != len(self._patients)
        remaining_incidents = [i for i in self._incidents if i.patient_id != patient_id]

        # Not a transaction: a crash between the two writes leaves orphans
        if removed:
            self._patients = remaining
            self._save_patients()
        if len(remaining_incidents) != len(self._incidents):
            self._incidents = remaining_incidents
            self._save_incidents()

        if removed:
            logger.info("Deleted patient %s", patient_id)
        return removed

    # -----------------------------
    # Incidents
    # -----------------------------
    def add_incident(self, **fields) -> Incident:
        incident_id = self._new_id("i", {i.id for i in self._incidents})
        incident = Incident(id=incident_id, **_clean_fields(Incident, fields))
        self._incidents = [*self._incidents, incident]
        self._save_incidents()
        logger.info("Added incident %s for patient %s", incident_id, incident.patient_id)
        return copy.deepcopy(incident)

    def update_incident(self, incident_id: str, **fields):
        for idx, i in enumerate(self._incidents):
            if i.id == incident_id:
                break
        else:
            logger.debug("update_incident: %s not found", incident_id)
            return None

        updated = replace(i, **_clean_fields(Incident, fields))
        self._incidents = [*self._incidents[:idx], updated, *self._incidents[idx + 1:]]
        self._save_incidents()
        return copy.deepcopy(updated)

    def delete_incident(self, incident_id: str) -> bool:
        remaining = [i for i in self._incidents if i.id != incident_id]
        if len(remaining) == len(self._incidents):
            return False
        self._incidents = remaining
        self._save_incidents()
        logger.info("Deleted incident %s", incident_id)
        return True

    # -----------------------------
    # Attachments
    # -----------------------------
    def add_incident_files(self, incident_id: str, attachments):
        incident = self.get_incident(incident_id)
        if incident is None:
            return None
        new_files = [FileAttachment.coerce(a) for a in attachments]
        return self.update_incident(incident_id, files=[*incident.files, *new_files])

    def remove_incident_file(self, incident_id: str, index: int):
        incident = self.get_incident(incident_id)
        if incident is None or not 0 <= index < len(incident.files):
            return None
        files = [f for pos, f in enumerate(incident.files) if pos != index]
        return self.update_incident(incident_id, files=files)
