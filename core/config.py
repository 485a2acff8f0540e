import os
import logging

from dotenv import load_dotenv

# Load .env so CLINIC_* settings are available even when running via Streamlit
load_dotenv()

BASE_DIR = os.path.dirname(os.path.dirname(__file__))

DB_PATH = os.getenv("CLINIC_DB_PATH", os.path.join(BASE_DIR, "data", "clinic.db"))
LOG_LEVEL = os.getenv("CLINIC_LOG_LEVEL", "INFO").upper()


def configure_logging(level: str | None = None):
    """Set up root logging once for the app and the scripts."""
    logging.basicConfig(
        level=getattr(logging, level or LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
