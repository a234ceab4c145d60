"""
Tests for the SQLAlchemy-backed Configuration Store.
"""
from datetime import datetime, timezone

import pytest

from calapps.core.exceptions import StoreError
from calapps.models import App
from calapps.services.app_store import AppStore


class StubEngine:
    def __init__(self):
        self.disposed = 0

    async def dispose(self):
        self.disposed += 1


def _zoho_app(**overrides) -> App:
    values = dict(
        slug="zoho-calendar",
        dir_name="zohocalendar",
        categories=["calendar"],
        keys={"client_id": "id-123", "client_secret": "secret-456"},
        enabled=True,
    )
    values.update(overrides)
    return App(**values)


async def test_find_missing_returns_none(store):
    assert await store.find("zoho-calendar") is None


async def test_create_then_find(store):
    await store.create(_zoho_app())

    app = await store.find("zoho-calendar")

    assert app is not None
    assert app.dir_name == "zohocalendar"
    assert app.categories == ["calendar"]
    assert app.keys == {"client_id": "id-123", "client_secret": "secret-456"}
    assert app.enabled is True
    assert isinstance(app.created_at, datetime)
    assert isinstance(app.updated_at, datetime)


async def test_duplicate_slug_is_a_constraint_error(store):
    await store.create(_zoho_app())

    with pytest.raises(StoreError) as exc_info:
        await store.create(_zoho_app(dir_name="zohocalendar2"))

    err = exc_info.value
    assert err.code == "STORE_CONSTRAINT"
    assert err.details == {"operation": "create", "slug": "zoho-calendar"}
    assert "secret-456" not in err.message


async def test_missing_table_is_reported_as_unavailable(bare_engine):
    store = AppStore(bare_engine)
    try:
        with pytest.raises(StoreError) as exc_info:
            await store.create(_zoho_app())
    finally:
        await store.release()

    assert exc_info.value.code == "STORE_UNAVAILABLE"
    assert exc_info.value.to_dict()["error"] is True


async def test_release_is_idempotent():
    engine = StubEngine()
    store = AppStore(engine)

    await store.release()
    await store.release()

    assert engine.disposed == 1


def test_repr_omits_keys():
    assert "secret-456" not in repr(_zoho_app())


def test_categories_are_normalized_as_a_set():
    assert App.normalize_categories(["crm", "calendar", "calendar"]) == ["calendar", "crm"]


def test_unknown_category_is_rejected():
    with pytest.raises(ValueError):
        App.normalize_categories(["calendars"])


def test_timestamp_defaults_are_timezone_aware():
    from calapps.models.app import utcnow

    assert utcnow().tzinfo is timezone.utc
    for column in ("createdAt", "updatedAt"):
        col = App.__table__.c[column]
        assert col.type.timezone is True
        assert col.server_default is not None
