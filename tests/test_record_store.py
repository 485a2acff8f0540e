import json
import logging

from core.storage import MemoryStorage, PATIENTS_KEY, INCIDENTS_KEY
from models.incident import FileAttachment
from services.record_store import RecordStore


def _stored(storage, key):
    return json.loads(storage.get_item(key))


# -----------------------------
# Hydration
# -----------------------------
def test_hydrate_seeds_and_persists_demo_data(records, storage):
    assert [p.id for p in records.patients] == ["p1", "p2"]
    assert [i.id for i in records.incidents] == ["i1", "i2", "i3"]
    assert [p["id"] for p in _stored(storage, PATIENTS_KEY)] == ["p1", "p2"]
    assert len(_stored(storage, INCIDENTS_KEY)) == 3


def test_hydrate_reads_existing_collections():
    storage = MemoryStorage({
        PATIENTS_KEY: json.dumps([{"id": "p7", "name": "Zed", "healthInfo": "none"}]),
        INCIDENTS_KEY: json.dumps([]),
    })
    store = RecordStore(storage).hydrate()
    assert [p.name for p in store.patients] == ["Zed"]
    assert store.patients[0].health_info == "none"
    assert store.incidents == ()


def test_hydrate_reseeds_malformed_json(caplog):
    storage = MemoryStorage({PATIENTS_KEY: "{not json", INCIDENTS_KEY: "[]"})
    with caplog.at_level(logging.WARNING):
        store = RecordStore(storage).hydrate()
    assert [p.id for p in store.patients] == ["p1", "p2"]
    assert store.incidents == ()
    assert "malformed" in caplog.text
    assert [p["id"] for p in _stored(storage, PATIENTS_KEY)] == ["p1", "p2"]


def test_hydrate_reseeds_when_payload_is_not_a_list():
    storage = MemoryStorage({PATIENTS_KEY: json.dumps({"id": "p1"})})
    store = RecordStore(storage).hydrate()
    assert len(store.patients) == 2


# -----------------------------
# Patients
# -----------------------------
def test_add_patient_ids_are_distinct_within_the_same_millisecond(records):
    ids = [records.add_patient(name=f"N{n}").id for n in range(50)]
    assert len(set(ids)) == 50
    assert len({p.id for p in records.patients}) == 52


def test_add_patient_never_reuses_an_existing_id():
    storage = MemoryStorage({
        PATIENTS_KEY: json.dumps([{"id": "p5000", "name": "Old"}]),
        INCIDENTS_KEY: "[]",
    })
    store = RecordStore(storage, clock=lambda: 5.0).hydrate()
    assert store.add_patient(name="New").id == "p5001"


def test_add_patient_ignores_client_supplied_id(records):
    patient = records.add_patient(id="p1", name="Dup")
    assert patient.id != "p1"
    assert patient.id.startswith("p")


def test_add_patient_persists_full_collection(records, storage):
    records.add_patient(name="Kiran", dob="1990-01-02", health_info="Diabetic")
    stored = _stored(storage, PATIENTS_KEY)
    assert [p["name"] for p in stored] == ["AnilReddy", "reshu", "Kiran"]
    assert stored[-1]["healthInfo"] == "Diabetic"


def test_update_patient_changes_only_given_fields(records):
    before = records.get_patient("p1")
    after = records.update_patient("p1", name="X")
    assert after.name == "X"
    assert records.get_patient("p1").to_dict() == {**before.to_dict(), "name": "X"}


def test_update_patient_cannot_change_id(records):
    records.update_patient("p1", id="p99", name="Still p1")
    assert records.get_patient("p1").name == "Still p1"
    assert records.get_patient("p99") is None


def test_update_missing_patient_is_a_no_op(records, storage):
    before = storage.get_item(PATIENTS_KEY)
    assert records.update_patient("nope", name="X") is None
    assert storage.get_item(PATIENTS_KEY) == before


def test_delete_patient_cascades_to_incidents(records, storage):
    assert records.delete_patient("p1") is True
    assert records.get_patient_incidents("p1") == []
    assert [i.id for i in records.incidents] == ["i3"]
    assert all(i["patientId"] != "p1" for i in _stored(storage, INCIDENTS_KEY))


def test_cascade_scenario_from_a_single_patient(store_with_p1):
    store_with_p1.add_incident(
        patient_id="p1", status="Scheduled", appointment_date="2025-01-01T10:00:00",
        title="Checkup",
    )
    assert len(store_with_p1.get_patient_incidents("p1")) == 1

    store_with_p1.delete_patient("p1")
    assert not any(i.patient_id == "p1" for i in store_with_p1.incidents)
    assert store_with_p1.patients == ()


def test_delete_missing_patient_returns_false(records):
    assert records.delete_patient("ghost") is False
    assert len(records.patients) == 2
    assert len(records.incidents) == 3


# -----------------------------
# Incidents
# -----------------------------
def test_add_incident_assigns_prefixed_unique_ids(records):
    a = records.add_incident(patient_id="p2", title="A", appointment_date="2025-08-01T09:00:00")
    b = records.add_incident(patient_id="p2", title="B", appointment_date="2025-08-01T09:00:00")
    assert a.id.startswith("i") and b.id.startswith("i")
    assert a.id != b.id


def test_update_incident_allows_any_status_transition(records):
    records.update_incident("i2", status="Scheduled")
    records.update_incident("i2", status="Cancelled")
    assert records.get_incident("i2").status == "Cancelled"
    assert records.get_incident("i2").cost == 280


def test_update_and_delete_missing_incident_are_no_ops(records):
    assert records.update_incident("ghost", title="X") is None
    assert records.delete_incident("ghost") is False
    assert len(records.incidents) == 3


def test_delete_incident_does_not_touch_patients(records):
    assert records.delete_incident("i1") is True
    assert [i.id for i in records.get_patient_incidents("p1")] == ["i2"]
    assert len(records.patients) == 2


def test_get_patient_incidents_keeps_collection_order_and_is_repeatable(records, storage):
    before = storage.get_item(INCIDENTS_KEY)
    first = records.get_patient_incidents("p1")
    second = records.get_patient_incidents("p1")
    assert [i.id for i in first] == ["i1", "i2"]
    assert first == second
    assert storage.get_item(INCIDENTS_KEY) == before


def test_snapshots_are_copies(records):
    snapshot = records.patients
    snapshot[0].name = "Mutated"
    records.get_patient_incidents("p1")[0].title = "Mutated"
    assert records.get_patient("p1").name == "AnilReddy"
    assert records.get_incident("i1").title == "Routine Cleaning"


def test_rehydrating_from_persisted_state_yields_equal_collections(records, storage):
    records.add_patient(name="Kiran", contact="123")
    records.add_incident(
        patient_id="p2", title="Filling", appointment_date="2025-09-01T11:30:00",
        cost=75.5, files=[FileAttachment(name="a.txt", url="data:text/plain;base64,aGk=", type="text/plain")],
    )
    records.update_patient("p2", address="koramangala")

    reloaded = RecordStore(storage).hydrate()
    assert reloaded.patients == records.patients
    assert reloaded.incidents == records.incidents


# -----------------------------
# Attachments
# -----------------------------
def test_add_and_remove_incident_files_by_index(records):
    files = [
        FileAttachment(name=f"f{n}.txt", url="data:text/plain;base64,aGk=", type="text/plain")
        for n in range(3)
    ]
    records.add_incident_files("i1", files[:2])
    records.add_incident_files("i1", [files[2].to_dict()])
    assert [f.name for f in records.get_incident("i1").files] == ["f0.txt", "f1.txt", "f2.txt"]

    records.remove_incident_file("i1", 1)
    assert [f.name for f in records.get_incident("i1").files] == ["f0.txt", "f2.txt"]


def test_remove_incident_file_out_of_range_is_a_no_op(records):
    assert records.remove_incident_file("i1", 0) is None
    assert records.remove_incident_file("ghost", 0) is None
    assert records.get_incident("i1").files == []


# -----------------------------
# Change notifications / reset
# -----------------------------
def test_listeners_hear_about_each_persisted_collection(records):
    seen = []
    records.add_listener(seen.append)
    records.add_patient(name="N")
    records.delete_patient("p1")
    assert seen == [PATIENTS_KEY, PATIENTS_KEY, INCIDENTS_KEY]


def test_reset_restores_demo_data(records):
    records.delete_patient("p1")
    records.add_patient(name="Temp")
    records.reset()
    assert [p.id for p in records.patients] == ["p1", "p2"]
    assert len(records.incidents) == 3
