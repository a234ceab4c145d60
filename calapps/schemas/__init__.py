"""
Schemas module - Pydantic models for data crossing the store boundary.
"""

from calapps.schemas.app_keys import KeysReport, OAuthAppKeys, inspect_keys, redact_keys

__all__ = ["KeysReport", "OAuthAppKeys", "inspect_keys", "redact_keys"]
