#!/usr/bin/env python3
"""Dump the contents of a pybustrack database file.

Opens the store read-through (schema is only created if missing) and
prints every decoded row of the history table, the status table, or both.

Usage
-----
::

    python scripts/dump_store.py fleet.db
    python scripts/dump_store.py fleet.db --table status --json

Options::

    --table {records,status,both}   Which table to print (default: both)
    --json                          Output as machine-readable JSON
    --output FILE                   Write output to FILE instead of stdout
    --verbose                       Enable debug logging
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pybustrack import BusTrackError, Record, StoreConfig, open_store


def _section(title: str) -> str:
    bar = "=" * 60
    return f"\n{bar}\n  {title}\n{bar}"


def _format_record(record: Record) -> str:
    doors = "open" if record.doors_open else "closed"
    return (
        f"  bus {record.bus_id:>6}  {record.timestamp.isoformat()}  "
        f"({record.position.latitude:.6f}, {record.position.longitude:.6f})  doors {doors}"
    )


def _print_table(name: str, records: list[Record], out: list[str]) -> None:
    out.append(_section(f"{name} ({len(records)} rows)"))
    if not records:
        out.append("  (empty)")
    out.extend(_format_record(record) for record in records)


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump the tables of a pybustrack database file")
    parser.add_argument("database", help="Path to the SQLite database file")
    parser.add_argument("--table", choices=("records", "status", "both"), default="both", help="Table to print")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write output to FILE instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    if not Path(args.database).expanduser().is_file():
        print(f"No database file at {args.database}", file=sys.stderr)
        return 1

    tables = ("records", "status") if args.table == "both" else (args.table,)
    result: dict[str, list[Record]] = {}
    try:
        with open_store(StoreConfig.from_path(args.database)) as store:
            if "records" in tables:
                result["records"] = store.list_records()
            if "status" in tables:
                result["status"] = store.list_status()
    except BusTrackError as exc:
        print(f"Failed to read {args.database}: {exc}", file=sys.stderr)
        return 1

    if args.json_mode:
        payload: dict[str, Any] = {
            name: [record.model_dump(mode="json") for record in records] for name, records in result.items()
        }
        text = json.dumps(payload, indent=2, ensure_ascii=False)
    else:
        out: list[str] = []
        for name, records in result.items():
            _print_table(name, records, out)
        text = "\n".join(out)

    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        print(f"Output written to {args.output}", file=sys.stderr)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
