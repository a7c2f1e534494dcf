#!/usr/bin/env python3
"""
Delete every stress log for every user.

Usage:
    python reset_database.py

Same effect as `DELETE /api/reset-database`, for when the API is not running.
A running server keeps serving cached reads until their TTL runs out.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)) + '/..')

from repo_stress_logs import StoreError, StressLogRepo
from settings import settings


def main() -> int:
    print(f"Resetting database at {settings.db_path}...")
    try:
        deleted = StressLogRepo(settings.db_path).delete_all()
    except StoreError as e:
        print(f"Error resetting database: {e}")
        return 1
    print(f"Database reset successfully! Deleted {deleted} records.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
