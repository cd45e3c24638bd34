"""REST API for the JSON Tree Editor."""

from .app import create_app

__all__ = ["create_app"]
