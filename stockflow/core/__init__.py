from .config import settings, get_settings, Settings
from .database import Base, create_db_engine, create_session_factory, get_db, atomic
from .logging import setup_logging

__all__ = [
    "settings", "get_settings", "Settings",
    "Base", "create_db_engine", "create_session_factory", "get_db", "atomic",
    "setup_logging",
]
