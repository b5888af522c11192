"""Soft validation checks that warn instead of failing."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Inspect a raw configuration mapping for settings that work but look wrong.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    messages = []

    watch = config_dict.get("watch") or {}
    if isinstance(watch, dict):
        if watch.get("enabled") is False:
            messages.append("Hot-reload is disabled; edits to the events file need a restart")

        interval = watch.get("poll_interval")
        if isinstance(interval, str) and interval.strip().lower() in ("1s", "pt1s"):
            messages.append(
                f"Very short poll_interval ({interval}) stats the events file every second"
            )

    server = config_dict.get("server") or {}
    if isinstance(server, dict) and server.get("host") == "0.0.0.0":
        messages.append("Server binds to all interfaces (0.0.0.0); there is no authentication")

    return messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit each message as a UserWarning."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
