"""
HTTP API for the kitchen order relay.

This package provides the FastAPI application that exposes:
- The storefront page
- Order intake with Discord notification
- A health check
"""

from api.main import app

__all__ = ["app"]
