"""HTTP interface: /events, /meta and /health."""

from .app import create_app

__all__ = ["create_app"]
