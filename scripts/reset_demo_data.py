"""Reset the clinic database back to the demo dataset.

Drops the stored patients/incidents, rewrites the seeded user list and logs
out whoever was signed in. Run from the project root:

    python -m scripts.reset_demo_data
"""
from core.config import configure_logging, DB_PATH
from core.setup_db import init_db
from core.storage import SqlStorage, CURRENT_USER_KEY
from services.record_store import RecordStore
from services.session_store import SessionStore


def main():
    configure_logging()
    print(f"Database: {DB_PATH}")
    init_db()

    storage = SqlStorage()
    records = RecordStore(storage)
    records.reset()

    sessions = SessionStore(storage)
    sessions.reset_users()
    # Every browser session's login, plus the unkeyed one
    for key in storage.keys():
        if key == CURRENT_USER_KEY or key.startswith(f"{CURRENT_USER_KEY}:"):
            storage.remove_item(key)

    print(f"Reset complete: {len(records.patients)} patients, {len(records.incidents)} incidents.")


if __name__ == "__main__":
    main()
