#!/usr/bin/env python3
"""
Copy the registry and notes from a JSON store file into the SQLite store.

Usage:
    python scripts/migrate_json_to_db.py --json data/store.json --db data/roles.db
"""

import argparse
from pathlib import Path

from roletagger.database import SqliteStore
from roletagger.storage import JsonFileStore


def migrate(json_path: Path, db_path: Path, dry_run: bool = False) -> int:
    """
    Copy every key from the JSON store into the database.

    Args:
        json_path: Path to JSON store file
        db_path: Path to SQLite database file
        dry_run: If True, don't write to database

    Returns:
        Number of keys copied (or that would be copied)
    """
    source = JsonFileStore(json_path)
    keys = source.keys()
    print(f"Found {len(keys)} keys in {json_path}")

    if dry_run:
        for key in keys:
            print(f"  would copy {key}")
        return len(keys)

    target = SqliteStore(db_path)
    try:
        for key in keys:
            target.set_item(key, source.get_item(key))
            print(f"  copied {key}")
    finally:
        target.close()
    return len(keys)


def main():
    parser = argparse.ArgumentParser(description="Migrate roletagger JSON store to SQLite")
    parser.add_argument("--json", default="data/store.json", help="Path to JSON store")
    parser.add_argument("--db", default="data/roles.db", help="Path to SQLite database")
    parser.add_argument("--dry-run", action="store_true", help="List keys without writing")
    args = parser.parse_args()

    json_path = Path(args.json)
    if not json_path.exists():
        raise SystemExit(f"JSON store not found: {json_path}")

    count = migrate(json_path, Path(args.db), dry_run=args.dry_run)
    print(f"Done. keys={count}")


if __name__ == "__main__":
    main()
