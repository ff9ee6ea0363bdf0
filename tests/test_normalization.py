"""Tests for alias resolution and JobRecord normalization."""

from datetime import datetime, timezone

import pytest

from jobboard.domain.models import JobSource
from jobboard.normalization import (
    FIELD_ALIASES,
    JobNormalizer,
    coerce_sequence,
    coerce_text,
    is_empty,
    record_from_provider,
    record_from_store,
    resolve_alias,
)


# ============================================================================
# Alias table
# ============================================================================


class TestResolveAlias:
    """First non-empty key in the chain wins."""

    def test_primary_key_wins(self):
        assert resolve_alias({"title": "A", "position": "B"}, "title") == ("title", "A")

    def test_falls_through_empty_values(self):
        payload = {"title": "  ", "position": None, "job_title": "Engineer"}
        assert resolve_alias(payload, "title") == ("job_title", "Engineer")

    def test_nothing_found(self):
        assert resolve_alias({"other": 1}, "company") == (None, None)

    def test_unknown_attribute_raises(self):
        with pytest.raises(KeyError):
            resolve_alias({}, "salary")

    def test_title_chain_order(self):
        assert FIELD_ALIASES["title"] == ("title", "position", "job_title")

    @pytest.mark.parametrize("value", [None, "", "   ", [], (), {}])
    def test_is_empty(self, value):
        assert is_empty(value)

    @pytest.mark.parametrize("value", ["x", [1], {"a": 1}, 0, False])
    def test_is_not_empty(self, value):
        assert not is_empty(value)


# ============================================================================
# Record building
# ============================================================================


class TestJobNormalizer:
    """Provider and store payloads map onto the same JobRecord shape."""

    def test_provider_payload_with_aliases(self):
        record = record_from_provider(
            {
                "_id": 17,
                "job_title": "  Data Engineer ",
                "company_name": "Acme",
                "job_description": "Pipelines",
                "city": "Berlin",
                "postedDate": "2024-06-01T10:00:00Z",
                "tags": "python",
            }
        )

        assert record.source == JobSource.EXTERNAL
        assert record.id == "17"
        assert record.title == "Data Engineer"
        assert record.company == "Acme"
        assert record.description == "Pipelines"
        assert record.location == "Berlin"
        assert record.posted_at == datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)
        assert record.tags == ("python",)

    def test_store_row_uses_position_and_job_location(self):
        record = record_from_store(
            {
                "job_id": "p1",
                "position": "Backend Developer",
                "company": "Globex",
                "job_location": "Remote",
                "posted_date": datetime(2024, 1, 1),
            }
        )

        assert record.source == JobSource.PERSISTENT
        assert record.id == "p1"
        assert record.title == "Backend Developer"
        assert record.location == "Remote"
        assert record.posted_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_missing_fields_get_defaults(self):
        record = record_from_provider({"id": "x"})

        assert record.title == ""
        assert record.company == ""
        assert record.description == ""
        assert record.location is None
        assert record.posted_at is None
        assert record.tags == ()
        assert record.skills == ()

    def test_unparsable_date_becomes_none(self):
        assert record_from_provider({"id": "x", "posted_date": "not a date"}).posted_at is None

    def test_epoch_millis_date(self):
        record = record_from_provider({"id": "x", "createdAt": 1717236000000})
        assert record.posted_at == datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)

    def test_unconsumed_keys_kept_in_extra(self):
        record = record_from_provider({"id": "x", "title": "T", "salary": "100k", "remote": True})

        assert record.extra == {"salary": "100k", "remote": True}
        public = record.to_public_dict()
        assert public["salary"] == "100k"
        assert public["title"] == "T"

    def test_shadowed_alias_stays_in_extra(self):
        record = record_from_provider({"id": "x", "title": "Primary", "position": "Secondary"})

        assert record.title == "Primary"
        assert record.extra == {"position": "Secondary"}

    def test_labeled_tags_and_requirement_lists(self):
        record = record_from_provider(
            {
                "id": "x",
                "tags": [{"label": "Rust"}, "go", "", None],
                "requirements": ["5 years", "SQL"],
                "responsibilities": "Own the API",
            }
        )

        assert record.tags == ({"label": "Rust"}, "go")
        assert record.requirements == ("5 years", "SQL")
        assert record.responsibilities == "Own the API"

    def test_records_are_frozen(self):
        record = record_from_provider({"id": "x"})
        with pytest.raises(Exception):
            record.title = "changed"

    def test_new_posting_forces_id_and_defaults_date(self):
        now = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
        record = JobNormalizer().new_posting(
            {"id": "client-supplied", "position": "QA"}, job_id="generated", now=now
        )

        assert record.id == "generated"
        assert record.posted_at == now
        assert record.source == JobSource.PERSISTENT

    def test_new_posting_keeps_supplied_date(self):
        now = datetime(2024, 6, 1, tzinfo=timezone.utc)
        record = JobNormalizer().new_posting(
            {"position": "QA", "posted_date": "2024-05-01"}, job_id="g", now=now
        )

        assert record.posted_at == datetime(2024, 5, 1, tzinfo=timezone.utc)

    def test_normalize_batch_skips_non_mappings(self):
        records = JobNormalizer().normalize_batch(
            [{"id": "a"}, None, "text", {"id": "b"}], JobSource.EXTERNAL
        )

        assert [r.id for r in records] == ["a", "b"]


# ============================================================================
# Coercion helpers
# ============================================================================


class TestCoercion:
    """Value coercion used by the normalizer."""

    def test_coerce_sequence(self):
        assert coerce_sequence(None) == ()
        assert coerce_sequence("solo") == ("solo",)
        assert coerce_sequence({"label": "x"}) == ({"label": "x"},)
        assert coerce_sequence(["a", " ", 3]) == ("a", "3")

    def test_coerce_text(self):
        assert coerce_text("  hi ") == "hi"
        assert coerce_text(["a", {"label": "b"}]) == "a, b"
        assert coerce_text(42) == "42"
