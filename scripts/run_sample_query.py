#!/usr/bin/env python3
"""Sample query harness for manual validation.

This script loads an events document into a store and runs one /events
query against it without starting the HTTP server, printing the page and a
summary table.

Usage:
    # Query the bundled fixture
    python scripts/run_sample_query.py q=jazz

    # Any /events parameter as key=value
    python scripts/run_sample_query.py --events tests/fixtures/events.json weekday=星期三 freeOnly=true

    # Show the /meta listing instead
    python scripts/run_sample_query.py --meta
"""

import argparse
import json
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from event_query.logging.config import configure_logging
from event_query.source import EventSourceError, EventSourceLoader
from event_query.store import EventStore


def print_header(title: str):
    """Print a formatted section header."""
    width = 80
    print("\n" + "=" * width)
    print(f" {title}")
    print("=" * width + "\n")


def print_summary_table(rows):
    """Print label/value pairs as a boxed table."""
    max_label_width = max(len(label) for label, _ in rows)

    print("┌" + "─" * (max_label_width + 2) + "┬" + "─" * 22 + "┐")
    print(f"│ {'Metric':<{max_label_width}} │ {'Value':<20} │")
    print("├" + "─" * (max_label_width + 2) + "┼" + "─" * 22 + "┤")

    for label, value in rows:
        print(f"│ {label:<{max_label_width}} │ {str(value):<20} │")

    print("└" + "─" * (max_label_width + 2) + "┴" + "─" * 22 + "┘")


def parse_params(pairs):
    """Turn key=value arguments into a query parameter mapping."""
    params = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"Expected key=value, got '{pair}'")
        params[key] = value
    return params


def main():
    """Main entry point for the sample query harness."""
    parser = argparse.ArgumentParser(
        description="Run a sample /events query against an events file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--events",
        type=Path,
        default=Path("tests/fixtures/events.json"),
        help="Path to events JSON file (default: tests/fixtures/events.json)",
    )
    parser.add_argument(
        "--meta",
        action="store_true",
        help="Print the distinct types and districts instead of running a query",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: WARNING)",
    )
    parser.add_argument("params", nargs="*", help="Query parameters as key=value")

    args = parser.parse_args()

    try:
        params = parse_params(args.params)
    except ValueError as e:
        print(f"❌ Error: {e}")
        return 1

    configure_logging(level=args.log_level, format_type="key-value", environment="sample")

    print_header("Event Query Service - Sample Query Harness")
    print(f"Events file: {args.events}")

    store = EventStore()
    try:
        working_set = EventSourceLoader(args.events, store).load()
    except EventSourceError as e:
        print(f"\n❌ Error: {e}")
        return 1

    print(f"✓ Loaded {len(working_set)} events")

    if args.meta:
        print_header("Meta")
        print(json.dumps(store.meta().to_dict(), ensure_ascii=False, indent=2))
        return 0

    result = store.query(params)

    print_header("Results")
    for record in result.results:
        print(json.dumps(record, ensure_ascii=False))

    print_header("Query Summary")
    print_summary_table(
        [
            ("Parameters", " ".join(args.params) or "(none)"),
            ("Total Matches", result.total),
            ("Offset", result.offset),
            ("Limit", result.limit),
            ("Returned", len(result.results)),
        ]
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
