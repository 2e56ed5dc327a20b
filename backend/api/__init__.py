"""
Costshare API package.

Provides the FastAPI application for the usage cost-sharing dashboard.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
