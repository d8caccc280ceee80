"""
wallet-users API package.

Provides the FastAPI application for the wallet-users service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
