from .database import get_db_context, make_session_factory, engine, SessionLocal, Base

__all__ = [
    "get_db_context",
    "make_session_factory",
    "engine",
    "SessionLocal",
    "Base",
]
