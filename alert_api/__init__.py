"""HTTP API for the Alert Service."""

from .app import create_app

__all__ = ["create_app"]
