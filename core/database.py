import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from contextlib import contextmanager

from core.config import DB_PATH

DATABASE_URL = f"sqlite:///{DB_PATH}"

# Base class for all models
Base = declarative_base()


def make_engine(url: str):
    if url.startswith("sqlite:///"):
        # SQLite won't create the parent folder for us
        folder = os.path.dirname(url[len("sqlite:///"):])
        if folder:
            os.makedirs(folder, exist_ok=True)
    return create_engine(url, connect_args={"check_same_thread": False})


def make_session_factory(url: str, create_tables: bool = True):
    """Build a session factory bound to its own engine.

    Used by tests and scripts that point at a database other than the
    configured one.
    """
    eng = make_engine(url)
    if create_tables:
        Base.metadata.create_all(bind=eng)
    return sessionmaker(autocommit=False, autoflush=False, bind=eng)


# Create engine
engine = make_engine(DATABASE_URL)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_db_context(session_factory=None):
    """
    Context manager for database sessions.
    Automatically closes session when done.

    Usage:
        with get_db_context() as db:
            result = db.query(Model).all()
    """
    db = (session_factory or SessionLocal)()
    try:
        yield db
    finally:
        db.close()
