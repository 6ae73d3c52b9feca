#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify both stores are reachable before starting the API.
Usage: python scripts/check_connections.py
"""
import sys

from placement_tracker.core.config import get_settings
from placement_tracker.db.mongodb import init_mongo_indexes, test_mongo_connection
from placement_tracker.db.postgres import execute_raw_sql, test_postgres_connection


def main() -> int:
    settings = get_settings()
    ok = True
    print("=" * 50)
    print("PLACEMENT TRACKER - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] PostgreSQL...")
    print(f"    URL: postgresql://{settings.postgres_user}:****@{settings.postgres_host}:{settings.postgres_port}/{settings.postgres_db}")
    if test_postgres_connection():
        count = execute_raw_sql("SELECT COUNT(*) AS n FROM companies")[0]["n"]
        print(f"    CONNECTED ({count} companies)")
    else:
        print("    FAILED")
        ok = False

    print("\n[2] MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if test_mongo_connection():
        init_mongo_indexes()
        print("    CONNECTED (indexes ensured)")
    else:
        print("    FAILED")
        ok = False

    print("\n" + "=" * 50)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
