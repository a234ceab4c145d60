"""
Credential blobs stored in ``App.keys``.

The store keeps keys as untyped JSON. Writes go through ``OAuthAppKeys`` so
only well-formed OAuth client credentials are stored; reads are inspected
with ``inspect_keys`` which reports shape and field presence without ever
returning the values themselves.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

REDACTED = "********"


class OAuthAppKeys(BaseModel):
    """OAuth client credentials for a calendar integration."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str

    @field_validator("client_id", "client_secret")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        """Values are stored exactly as given; only blank ones are refused."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    def __repr__(self) -> str:
        return "OAuthAppKeys(client_id=..., client_secret=...)"

    __str__ = __repr__


class KeysReport(BaseModel):
    """What can safely be said about a stored keys blob."""

    shape: str
    is_object: bool
    client_id_present: Optional[bool] = None
    client_secret_present: Optional[bool] = None


def describe_shape(value: Any) -> str:
    """JSON type name of a decoded JSON value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def inspect_keys(blob: Any) -> KeysReport:
    shape = describe_shape(blob)
    if not isinstance(blob, dict):
        return KeysReport(shape=shape, is_object=False)
    return KeysReport(
        shape=shape,
        is_object=True,
        client_id_present=bool(blob.get("client_id")),
        client_secret_present=bool(blob.get("client_secret")),
    )


def redact_keys(blob: Any) -> Any:
    """
    Copy of ``blob`` safe to print.

    Scalars are masked, empty values are kept so missing credentials stay
    visible, and containers keep their structure.
    """
    if isinstance(blob, dict):
        return {key: redact_keys(value) for key, value in blob.items()}
    if isinstance(blob, (list, tuple)):
        return [redact_keys(value) for value in blob]
    if blob is None or blob == "" or isinstance(blob, bool):
        return blob
    return REDACTED
