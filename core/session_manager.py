import uuid

import streamlit as st

from core.setup_db import init_db
from core.storage import SqlStorage
from models.user import ADMIN, PATIENT
from services.record_store import RecordStore
from services.session_store import SessionStore

# Query parameter carrying the browser session id across reloads
SESSION_PARAM = "sid"

HOME_PAGES = {
    ADMIN: "pages/a_dashboard.py",
    PATIENT: "pages/p_dashboard.py",
}


def _browser_session_id() -> str:
    sid = st.query_params.get(SESSION_PARAM)
    if not sid:
        sid = uuid.uuid4().hex
        st.query_params[SESSION_PARAM] = sid
    return sid


def init_session_state():
    """Build the stores once per browser session and keep them in session state.

    The login is persisted under a key of its own for this browser session,
    so one visitor signing in never signs in anybody else.
    """
    if "records" in st.session_state and "auth" in st.session_state:
        # Page switches drop the query string; put the id back for reloads
        sid = st.session_state.auth.session_id
        if st.query_params.get(SESSION_PARAM) != sid:
            st.query_params[SESSION_PARAM] = sid
        return
    init_db()
    storage = SqlStorage()
    st.session_state.records = RecordStore(storage).hydrate()
    st.session_state.auth = SessionStore(storage, session_id=_browser_session_id()).hydrate()


def get_records() -> RecordStore:
    init_session_state()
    return st.session_state.records


def get_auth() -> SessionStore:
    init_session_state()
    return st.session_state.auth


def get_current_user():
    return get_auth().current_user


def login(email: str, password: str) -> bool:
    return get_auth().login(email.strip(), password)


def logout():
    """Clear session and redirect to main app page."""
    auth = get_auth()
    auth.logout()
    st.query_params.clear()
    st.query_params[SESSION_PARAM] = auth.session_id
    st.switch_page("app.py")


def home_page(role: str | None) -> str:
    return HOME_PAGES.get(role, "app.py")


def require_role(role: str):
    """Restrict page by role.

    Anonymous visitors go back to the login page; a logged-in user with the
    wrong role goes to their own home page.
    """
    auth = get_auth()

    if not auth.is_authenticated:
        st.warning("Please log in to access this page.")
        st.switch_page("app.py")

    if auth.current_user.role != role:
        st.error(f" Access denied. This page requires '{role}' role.")
        st.switch_page(home_page(auth.current_user.role))
