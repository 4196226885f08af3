"""
Unit tests for scripts/recompute_progress.py

The Supabase client is a MagicMock query builder; the first execute()
returns the stored rows and later ones answer the conditional writes.
"""
from datetime import datetime, timezone
from unittest.mock import MagicMock, Mock

import pytest

from backend.core import progress_tracker
from domain.converters import progress_to_db_row
from scripts.recompute_progress import recompute_progress
from tests.fakes import create_progress_record

T0 = datetime(2024, 3, 4, 9, 0, tzinfo=timezone.utc)


def make_client(*results):
    query = MagicMock()
    for name in ("select", "eq", "limit", "order", "update"):
        getattr(query, name).return_value = query
    query.execute.side_effect = [Mock(data=r) for r in results]
    client = MagicMock()
    client.table.return_value = query
    return client, query


def consistent_row(workout_id="w1", version=2):
    record = progress_tracker.complete_day(
        create_progress_record(user_id="u1", workout_id=workout_id),
        1, 1, 30, "Medium", now=T0,
    )
    row = progress_to_db_row(record)
    row.update(id=f"row-{workout_id}", version=version)
    return row


def drifted_row(workout_id="w2", version=2):
    row = consistent_row(workout_id, version)
    row.update(total_completed_days=0, total_time_spent=0, current_day=1)
    return row


@pytest.mark.unit
class TestRecomputeProgress:
    def test_no_rows(self):
        client, _ = make_client([])

        summary = recompute_progress(client, now=T0)

        assert summary["processed"] == 0

    def test_unchanged_records_are_not_written(self):
        client, query = make_client([consistent_row()])

        summary = recompute_progress(client, now=T0)

        assert summary == {
            "processed": 1, "changed": 0, "updated": 0, "skipped": 0, "errors": 0,
        }
        query.update.assert_not_called()

    def test_drifted_record_is_rewritten(self):
        stored = drifted_row()
        client, query = make_client([stored], [dict(stored, version=3)])

        summary = recompute_progress(client, now=T0)

        assert summary["changed"] == 1
        assert summary["updated"] == 1
        payload = query.update.call_args[0][0]
        assert payload["total_completed_days"] == 1
        assert payload["total_time_spent"] == 30
        assert payload["current_day"] == 2
        assert payload["version"] == 3
        query.eq.assert_any_call("version", 2)

    def test_dry_run_does_not_write(self):
        client, query = make_client([drifted_row(), consistent_row()])

        summary = recompute_progress(client, dry_run=True, now=T0)

        assert summary["processed"] == 2
        assert summary["changed"] == 1
        assert summary["updated"] == 0
        query.update.assert_not_called()

    def test_concurrently_modified_record_is_skipped(self):
        stored = drifted_row()
        client, _ = make_client([stored], [], [dict(stored, version=3)])

        summary = recompute_progress(client, now=T0)

        assert summary["skipped"] == 1
        assert summary["updated"] == 0

    def test_unparseable_row_counts_as_error(self):
        broken = consistent_row()
        broken["completed_days"] = [{"week": 1, "day": 1, "difficulty": "Brutal"}]
        client, _ = make_client([broken, consistent_row("w3")])

        summary = recompute_progress(client, now=T0)

        assert summary["errors"] == 1
        assert summary["processed"] == 2

    def test_limit_is_applied(self):
        client, query = make_client([])

        recompute_progress(client, limit=10, now=T0)

        query.limit.assert_called_once_with(10)
