#!/usr/bin/env python3
"""Validate a configuration file against the schema and print its settings.

Usage:
    python verify_config.py                  # checks config.example.yaml
    python verify_config.py config.yaml
"""

import sys
from pathlib import Path

import yaml

from event_query.config import AppConfig, validate_config_file


def verify_config(config_file: Path) -> bool:
    """Validate config_file and summarize the effective settings."""
    if not config_file.exists():
        print(f"✗ {config_file} not found")
        return False

    if not validate_config_file(config_file):
        return False

    with open(config_file, "r", encoding="utf-8") as f:
        config = AppConfig.model_validate(yaml.safe_load(f) or {})

    print(f"  - Events file: {config.source.path} ({config.source.encoding})")
    if config.watch.enabled:
        print(f"  - Hot-reload: every {config.watch.poll_interval_seconds}s")
    else:
        print("  - Hot-reload: disabled")
    print(f"  - Listening on: {config.server.host}:{config.server.port}")
    print(f"  - Logging: {config.logging.level} ({config.logging.format})")
    return True


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("config.example.yaml")
    sys.exit(0 if verify_config(path) else 1)
