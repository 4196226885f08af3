#!/usr/bin/env python3
"""
Recompute derived progress fields from the completed-day log.

Re-runs the progress recompute over stored user_workout_progress rows and
writes back every record whose aggregates, streaks, completion state or
cursor drifted from its log. Writes are conditional on the version read,
so records updated by users while the script runs are skipped, not
overwritten.

Usage:
    python scripts/recompute_progress.py [--dry-run] [--limit N]

Options:
    --dry-run    Preview changes without updating database
    --limit N    Process only N records (for testing)
"""
import argparse
import os
import sys
from datetime import datetime, timezone
from typing import Dict, Optional

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from supabase import Client, create_client

from application.exceptions import ConcurrencyConflictError, NoProgressRecordError
from backend.core.progress_tracker import recompute
from backend.settings import get_settings
from domain.converters import db_row_to_progress
from infrastructure.db.progress_repository import PROGRESS_TABLE, SupabaseProgressRepository


def get_supabase_client() -> Client:
    """Create Supabase client with service role key."""
    settings = get_settings()

    if not settings.supabase_url or not settings.supabase_service_role_key:
        print("ERROR: SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
        sys.exit(1)

    return create_client(settings.supabase_url, settings.supabase_service_role_key)


def recompute_progress(
    client: Client,
    dry_run: bool = False,
    limit: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Dict[str, int]:
    """
    Recompute derived fields of stored progress records.

    Args:
        client: Supabase client
        dry_run: If True, preview changes without updating
        limit: Maximum number of records to process
        now: Reference time for streaks (defaults to the current UTC time)

    Returns:
        Counts of processed, changed, updated, skipped and failed records
    """
    now = now or datetime.now(timezone.utc)
    repo = SupabaseProgressRepository(client)

    query = client.table(PROGRESS_TABLE).select("*").order("id")
    if limit:
        query = query.limit(limit)
    result = query.execute()

    summary = {"processed": 0, "changed": 0, "updated": 0, "skipped": 0, "errors": 0}
    rows = result.data or []
    if not rows:
        print("No progress records found")
        return summary

    print(f"Found {len(rows)} progress records")

    for row in rows:
        summary["processed"] += 1
        label = f"{row.get('user_id')}/{row.get('workout_id')}"

        try:
            record = db_row_to_progress(row)
            refreshed = recompute(record, now)
        except ValueError as e:
            print(f"  ERROR parsing {label}: {e}")
            summary["errors"] += 1
            continue

        if refreshed == record:
            continue

        summary["changed"] += 1
        if dry_run:
            print(
                f"  [DRY RUN] Would update {label}: "
                f"days {record.total_completed_days} -> {refreshed.total_completed_days}, "
                f"cursor ({record.current_week},{record.current_day}) -> "
                f"({refreshed.current_week},{refreshed.current_day})"
            )
            continue

        try:
            repo.save(refreshed)
            print(f"  Updated {label}")
            summary["updated"] += 1
        except (ConcurrencyConflictError, NoProgressRecordError) as e:
            print(f"  Skipped {label}: {e}")
            summary["skipped"] += 1

    print()
    print("=" * 50)
    print("Recompute complete:")
    print(f"  Total processed: {summary['processed']}")
    if dry_run:
        print(f"  Would update: {summary['changed']}")
    else:
        print(f"  Updated: {summary['updated']}")
        print(f"  Skipped (modified concurrently): {summary['skipped']}")
    print(f"  Errors: {summary['errors']}")
    return summary


def main():
    parser = argparse.ArgumentParser(
        description="Recompute derived progress fields from completed-day logs"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview changes without updating database",
    )
    parser.add_argument(
        "--limit",
        type=int,
        help="Maximum number of records to process",
    )

    args = parser.parse_args()

    if args.dry_run:
        print("DRY RUN MODE - no changes will be made")
        print()

    recompute_progress(get_supabase_client(), dry_run=args.dry_run, limit=args.limit)


if __name__ == "__main__":
    main()
