"""
Models module - SQLAlchemy ORM models for the app store database.
"""

from calapps.models.app import App, AppCategory

__all__ = [
    "App",
    "AppCategory",
]
