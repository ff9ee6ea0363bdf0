"""Tests for domain models."""

import pytest
from pydantic import ValidationError

from jobboard.domain import ExternalSnapshot, JobQuery, JobRecord, JobSource, SnapshotStatus
from tests.helpers import make_record, utc

LIMITS = {"max_limit": 500, "max_query_length": 200}


class TestJobRecord:
    """JobRecord invariants."""

    def test_naive_posted_at_becomes_utc(self):
        record = JobRecord(id="1", source=JobSource.EXTERNAL, posted_at="2024-06-01T10:00:00")
        assert record.posted_at == utc(2024, 6, 1, 10)

    def test_source_required(self):
        with pytest.raises(ValidationError):
            JobRecord(id="1")

    def test_is_external(self):
        assert make_record("1", JobSource.EXTERNAL).is_external
        assert not make_record("1", JobSource.PERSISTENT).is_external

    def test_public_dict(self):
        record = make_record("1", posted_at=utc(2024, 6, 1), title="Dev", extra={"salary": 10})

        public = record.to_public_dict()

        assert public["id"] == "1"
        assert public["source"] == "external"
        assert public["salary"] == 10
        assert "extra" not in public
        assert public["posted_at"].startswith("2024-06-01T00:00:00")


class TestExternalSnapshot:
    """Snapshot status transitions."""

    def test_empty(self):
        snapshot = ExternalSnapshot.empty()

        assert snapshot.status == SnapshotStatus.NEVER_FETCHED
        assert not snapshot.has_been_fetched

    def test_as_stale_keeps_data(self):
        snapshot = ExternalSnapshot(
            records=(make_record("1"),), fetched_at=utc(2024, 6, 1), status=SnapshotStatus.FRESH
        )

        stale = snapshot.as_stale()

        assert stale.status == SnapshotStatus.STALE
        assert stale.records == snapshot.records
        assert stale.fetched_at == snapshot.fetched_at
        assert snapshot.status == SnapshotStatus.FRESH


class TestJobQuery:
    """Boundary-side validation of listing/search parameters."""

    def test_defaults(self):
        query = JobQuery.model_validate({}, context=LIMITS)

        assert query.term == ""
        assert query.limit == 50
        assert query.offset == 0

    def test_term_trimmed(self):
        assert JobQuery.model_validate({"term": "  python "}, context=LIMITS).term == "python"

    @pytest.mark.parametrize(
        "params",
        [
            {"limit": 0},
            {"limit": 501},
            {"offset": -1},
            {"term": "x" * 201},
            {"term": 42},
        ],
    )
    def test_invalid(self, params):
        with pytest.raises(ValidationError):
            JobQuery.model_validate(params, context=LIMITS)

    def test_bounds_follow_context(self):
        with pytest.raises(ValidationError):
            JobQuery.model_validate({"limit": 20}, context={"max_limit": 10})
        assert JobQuery.model_validate({"limit": 600}).limit == 600
