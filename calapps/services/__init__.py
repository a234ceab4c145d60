"""
Services module - Store access and maintenance flows.
"""

from calapps.services.app_store import AppStore, ConfigurationStore, open_app_store
from calapps.services.seed_check import (
    ZOHO_CALENDAR,
    SeedCheckResult,
    SeedTarget,
    run_seed_check,
)

__all__ = [
    "AppStore",
    "ConfigurationStore",
    "open_app_store",
    "ZOHO_CALENDAR",
    "SeedCheckResult",
    "SeedTarget",
    "run_seed_check",
]
