"""
Core module - Configuration, database and logging infrastructure.
"""

from calapps.core.config import settings, get_settings
from calapps.core.database import Base, build_engine, build_session_factory
from calapps.core.exceptions import CalAppsException, StoreError, AppKeysError

__all__ = [
    "settings",
    "get_settings",
    "Base",
    "build_engine",
    "build_session_factory",
    "CalAppsException",
    "StoreError",
    "AppKeysError",
]
