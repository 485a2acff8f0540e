from .record_store import RecordStore
from .session_store import SessionStore

# Streamlit-facing helpers live in core.session_manager; keep this package
# importable without a running app.

__all__ = ["RecordStore", "SessionStore"]
