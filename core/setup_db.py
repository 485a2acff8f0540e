# core/setup_db.py

from core.database import Base, engine
from core.storage import SqlStorage
from services.record_store import RecordStore
from services.session_store import SessionStore

# Import models so their tables are registered on Base
import models  # noqa: F401


def init_db(bind=None):
    Base.metadata.create_all(bind=bind or engine)


def main():
    print("Creating database tables...")
    init_db()

    # Hydrating seeds any missing collection with the demo data
    storage = SqlStorage()
    records = RecordStore(storage).hydrate()
    sessions = SessionStore(storage).hydrate()

    print(
        f"Database initialized: {len(records.patients)} patients, "
        f"{len(records.incidents)} incidents, {len(sessions.users)} users."
    )


if __name__ == "__main__":
    main()
