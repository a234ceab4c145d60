"""
Seed check for an OAuth calendar integration.

Reports whether the integration's credentials are present in the
environment and whether its ``App`` row exists, inserting the row when it
is missing and both credentials are available. Existing rows are never
modified.

Usage:
    async with open_app_store() as store:
        result = await run_seed_check(store, os.environ.get)
"""

import json
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from pydantic import ValidationError

from calapps.core.exceptions import AppKeysError, StoreError
from calapps.models.app import App, AppCategory
from calapps.schemas.app_keys import OAuthAppKeys, inspect_keys, redact_keys
from calapps.services.app_store import ConfigurationStore

logger = logging.getLogger(__name__)

EnvLookup = Callable[[str], Optional[str]]
Emit = Callable[[str], None]


@dataclass(frozen=True)
class SeedTarget:
    """Fixed identity of the integration being checked."""

    display_name: str
    slug: str
    dir_name: str
    categories: Tuple[str, ...]
    client_id_env: str
    client_secret_env: str


ZOHO_CALENDAR = SeedTarget(
    display_name="Zoho Calendar",
    slug="zoho-calendar",
    dir_name="zohocalendar",
    categories=(AppCategory.CALENDAR.value,),
    client_id_env="ZOHOCALENDAR_CLIENT_ID",
    client_secret_env="ZOHOCALENDAR_CLIENT_SECRET",
)


@dataclass
class SeedCheckResult:
    client_id_present: bool
    client_secret_present: bool
    found_initially: bool
    create_attempted: bool = False
    create_succeeded: bool = False
    create_error: Optional[str] = None
    exists_finally: bool = False

    @property
    def credentials_present(self) -> bool:
        return self.client_id_present and self.client_secret_present


def _presence(value: Optional[str]) -> str:
    return "✅ Set" if value else "❌ Not set"


def _format_keys(blob, show_secrets: bool, indent: Optional[int] = None) -> str:
    shown = blob if show_secrets else redact_keys(blob)
    return json.dumps(shown, indent=indent, default=str)


def build_app(target: SeedTarget, keys: OAuthAppKeys) -> App:
    """Record inserted for ``target`` when it is missing."""
    return App(
        slug=target.slug,
        dir_name=target.dir_name,
        categories=App.normalize_categories(target.categories),
        keys=keys.model_dump(),
        enabled=True,
    )


def _validated_keys(target: SeedTarget, client_id: str, client_secret: str) -> OAuthAppKeys:
    try:
        return OAuthAppKeys(client_id=client_id, client_secret=client_secret)
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors())
        raise AppKeysError(target.slug, f"blank {fields}") from exc


async def run_seed_check(
    store: ConfigurationStore,
    getenv: EnvLookup,
    target: SeedTarget = ZOHO_CALENDAR,
    *,
    dry_run: bool = False,
    show_secrets: bool = False,
    emit: Emit = print,
) -> SeedCheckResult:
    """
    Check and, if needed, seed the ``App`` row for ``target``.

    Store lookups are not guarded; a failing ``find`` propagates to the
    caller. A failing ``create`` is reported and the final check still runs.
    """
    emit(f"\n=== {target.display_name} Debug ===")

    # 1. Environment
    client_id = getenv(target.client_id_env)
    client_secret = getenv(target.client_secret_env)
    emit("\n1. Environment Variables:")
    emit(f"{target.client_id_env}: {_presence(client_id)}")
    emit(f"{target.client_secret_env}: {_presence(client_secret)}")

    # 2. Database
    emit("\n2. Database Check:")
    existing = await store.find(target.slug)
    result = SeedCheckResult(
        client_id_present=bool(client_id),
        client_secret_present=bool(client_secret),
        found_initially=existing is not None,
    )

    if existing is not None:
        report = inspect_keys(existing.keys)
        emit(f"{target.display_name} app found in database ✅")
        emit(f"Keys stored: {_format_keys(existing.keys, show_secrets)}")
        emit(f"Keys type: {report.shape}")
        if report.is_object:
            emit(f"client_id present: {report.client_id_present}")
            emit(f"client_secret present: {report.client_secret_present}")
    else:
        emit(f"{target.display_name} app NOT found in database ❌")

        if not result.credentials_present:
            emit("\n❌ Cannot seed - environment variables not set")
        elif dry_run:
            emit("\n⚠️  Dry run - not seeding")
        else:
            emit(f"\n3. Attempting to seed {target.display_name} app...")
            result.create_attempted = True
            try:
                keys = _validated_keys(target, client_id, client_secret)
                await store.create(build_app(target, keys))
            except (StoreError, AppKeysError) as exc:
                result.create_error = f"{exc.code}: {exc.message}"
                logger.error(
                    f"Failed to seed {target.slug}: {result.create_error}",
                    extra={"details": exc.details},
                )
                emit(f"❌ Failed to seed: {result.create_error}")
            else:
                result.create_succeeded = True
                emit(f"✅ {target.display_name} app seeded successfully!")

    # 3. Final check
    final = await store.find(target.slug)
    result.exists_finally = final is not None
    emit("\n4. Final Check:")
    if final is None:
        emit(f"{target.display_name} app does not exist in database ❌")
    else:
        emit(f"{target.display_name} app exists in database ✅")
        if final.keys:
            emit(f"Keys stored: {_format_keys(final.keys, show_secrets, indent=2)}")

    return result
