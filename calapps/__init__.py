# calapps - Cal app store maintenance tooling
"""
calapps Core Package

Maintenance commands for the app store's ``App`` table: inspecting
integration records and seeding missing ones from environment credentials.
"""

__version__ = "0.1.0"
__author__ = "calapps Team"
