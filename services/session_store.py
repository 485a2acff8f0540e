"""
Session store: who is logged in right now.

Credentials are compared in plaintext against the seeded user list. That is
the contract the demo accounts rely on; production use would need hashed
credentials.
"""

import json
import logging

from core.storage import USERS_KEY, session_key
from models.user import User, ADMIN, PATIENT
from services.record_store import load_collection, dump_collection
from services.seed_data import demo_users

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, storage, session_id: str | None = None):
        self.storage = storage
        self.session_id = session_id
        # Each browser session keeps its own login under currentUser:<id>
        self.session_key = session_key(session_id)
        self._users: list[User] = []
        self._current: User | None = None

    def hydrate(self):
        self._users = load_collection(self.storage, USERS_KEY, User, demo_users)

        raw = self.storage.get_item(self.session_key)
        if raw is not None:
            try:
                data = json.loads(raw)
                if not isinstance(data, dict):
                    raise ValueError("expected a JSON object")
                self._current = User.from_dict(data)
            except (ValueError, TypeError) as e:
                logger.warning("Stored session is malformed (%s); starting logged out.", e)
                self.storage.remove_item(self.session_key)
                self._current = None
        return self

    @property
    def users(self) -> tuple:
        return tuple(self._users)

    @property
    def current_user(self) -> User | None:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    @property
    def is_admin(self) -> bool:
        return self._current is not None and self._current.role == ADMIN

    @property
    def is_patient(self) -> bool:
        return self._current is not None and self._current.role == PATIENT

    def login(self, email: str, password: str) -> bool:
        user = next(
            (u for u in self._users if u.email == email and u.password == password),
            None,
        )
        if user is None:
            logger.info("Failed login for %r", email)
            return False

        self._current = user
        self.storage.set_item(self.session_key, json.dumps(user.to_dict()))
        logger.info("User %s logged in as %s", user.email, user.role)
        return True

    def logout(self):
        if self._current is not None:
            logger.info("User %s logged out", self._current.email)
        self._current = None
        self.storage.remove_item(self.session_key)

    def reset_users(self):
        """Rewrite the identity list from the demo seed."""
        self._users = demo_users()
        dump_collection(self.storage, USERS_KEY, self._users)
