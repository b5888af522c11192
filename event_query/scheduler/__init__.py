"""Polling watcher that hot-reloads the events document."""

from .service import ReloadWatcher

__all__ = [
    "ReloadWatcher",
]
