import json
import os
import tempfile

# Keep the configured database out of the working tree while tests import core.database
os.environ.setdefault("CLINIC_DB_PATH", os.path.join(tempfile.mkdtemp(), "clinic.db"))

import pytest

from core.database import make_session_factory
from core.storage import MemoryStorage, SqlStorage, PATIENTS_KEY, INCIDENTS_KEY
from models.incident import Incident
from services.record_store import RecordStore
from services.session_store import SessionStore

import models  # noqa: F401  (registers tables on Base)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def sql_storage(tmp_path):
    factory = make_session_factory(f"sqlite:///{tmp_path / 'clinic.db'}")
    return SqlStorage(factory)


@pytest.fixture
def frozen_clock():
    # Every call lands in the same millisecond
    return lambda: 1_750_000_000.0


@pytest.fixture
def records(storage, frozen_clock):
    return RecordStore(storage, clock=frozen_clock).hydrate()


@pytest.fixture
def sessions(storage):
    return SessionStore(storage).hydrate()


@pytest.fixture
def store_with_p1(frozen_clock):
    """Store holding a single patient p1 and no incidents."""
    storage = MemoryStorage({
        PATIENTS_KEY: json.dumps([{"id": "p1", "name": "A"}]),
        INCIDENTS_KEY: json.dumps([]),
    })
    return RecordStore(storage, clock=frozen_clock).hydrate()


def make_incident(id, patient_id="p1", appointment_date="2025-07-08T10:00:00",
                  status="Scheduled", cost=None, **extra):
    return Incident(
        id=id,
        patient_id=patient_id,
        title=extra.pop("title", f"Visit {id}"),
        appointment_date=appointment_date,
        status=status,
        cost=cost,
        **extra,
    )


@pytest.fixture
def incident_factory():
    return make_incident
