"""
App Store ORM Model

One row per installable integration:
- Slug and module directory
- Category tags
- Credential material (``keys``) as an untyped JSON blob
- Enabled flag
"""

import enum
from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import Boolean, DateTime, JSON, String, func
from sqlalchemy.orm import Mapped, mapped_column

from calapps.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AppCategory(str, enum.Enum):
    """Category tags an app can be listed under."""

    CALENDAR = "calendar"
    MESSAGING = "messaging"
    OTHER = "other"
    PAYMENT = "payment"
    VIDEO = "video"
    WEB3 = "web3"
    AUTOMATION = "automation"
    ANALYTICS = "analytics"
    CONFERENCING = "conferencing"
    CRM = "crm"


class App(Base):
    """
    App store entry for a single integration.

    Column names follow the camelCase names the web app's schema uses,
    so the table can be shared with it.
    """

    __tablename__ = "App"

    slug: Mapped[str] = mapped_column(String(255), primary_key=True)
    dir_name: Mapped[str] = mapped_column("dirName", String(255), unique=True, nullable=False)
    categories: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    keys: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt",
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        # keys omitted: they hold client secrets
        return f"<App(slug='{self.slug}', dir_name='{self.dir_name}', enabled={self.enabled})>"

    @staticmethod
    def normalize_categories(categories) -> List[str]:
        """Category tags have set semantics; store them sorted and unique."""
        return sorted({AppCategory(c).value for c in categories})
