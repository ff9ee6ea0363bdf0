"""Adapters from raw source payloads to JobRecord.

Both sources go through the same JobNormalizer so that downstream code never
has to duck-type optional fields:

- provider payloads (dicts from the external API) -> source=external
- store rows (dicts produced by the persistence layer) -> source=persistent
- new postings submitted through add_job -> source=persistent, with a fresh id

Normalization rules:
1. Each attribute is resolved through FIELD_ALIASES (first non-empty key wins)
2. Missing or singleton tags/skills become tuples
3. Text fields are coerced to stripped strings, except company, location and
   category, whose string values are kept verbatim;
   missing ones default to ""
4. Dates are parsed to UTC; unparsable dates become None
5. Source keys not consumed by an attribute are kept in ``extra``
"""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from jobboard.domain.models import JobRecord, JobSource
from jobboard.logging import get_logger
from jobboard.utils.timestamps import coerce_timestamp

from .aliases import FIELD_ALIASES, resolve_alias

logger = get_logger(__name__, component="normalization")

_REQUIRED_TEXT = ("title", "company", "description")
_OPTIONAL_TEXT = ("location", "category", "application_url")
_EXACT_TEXT = ("company", "location", "category")
_SEQUENCES = ("tags", "skills")
_TEXT_OR_LIST = ("requirements", "responsibilities")


class JobNormalizer:
    """Builds JobRecord instances from loosely shaped mappings."""

    def __init__(self, logger_instance: Optional[logging.Logger] = None):
        self.logger = logger_instance or logger

    def from_provider(self, payload: Mapping) -> JobRecord:
        return self._build(payload, JobSource.EXTERNAL)

    def from_store(self, payload: Mapping) -> JobRecord:
        return self._build(payload, JobSource.PERSISTENT)

    def new_posting(self, payload: Mapping, job_id: str, now: datetime) -> JobRecord:
        """Build a persistent record for a freshly submitted posting.

        The id is always the one supplied by the caller; ``posted_at`` falls
        back to ``now`` when the posting carries no usable date.
        """
        record = self._build(payload, JobSource.PERSISTENT)
        return record.model_copy(
            update={"id": job_id, "posted_at": record.posted_at or now}
        )

    def normalize_batch(self, payloads: Iterable[Any], source: JobSource) -> Tuple[JobRecord, ...]:
        """Normalize many payloads, skipping entries that are not mappings.

        Args:
            payloads: Raw items from one source
            source: Source tag applied to every record

        Returns:
            Tuple of JobRecord, in input order
        """
        records: List[JobRecord] = []
        skipped = 0

        for index, payload in enumerate(payloads):
            if not isinstance(payload, Mapping):
                skipped += 1
                self.logger.warning(
                    "Skipping non-object job payload",
                    extra={
                        "event": "normalization.record.skipped",
                        "index": index,
                        "payload_type": type(payload).__name__,
                        "job_source": source.value,
                    },
                )
                continue
            records.append(self._build(payload, source))

        self.logger.debug(
            f"Normalized {len(records)} {source.value} records",
            extra={
                "event": "normalization.batch.completed",
                "job_source": source.value,
                "normalized_count": len(records),
                "skipped_count": skipped,
            },
        )
        return tuple(records)

    def _build(self, payload: Mapping, source: JobSource) -> JobRecord:
        fields: Dict[str, Any] = {"source": source}
        consumed = set()

        for attribute in FIELD_ALIASES:
            key, value = resolve_alias(payload, attribute)
            if key is None:
                continue
            consumed.add(key)

            if attribute == "id":
                fields["id"] = str(value)
            elif attribute == "posted_at":
                fields["posted_at"] = coerce_timestamp(value)
            elif attribute in _SEQUENCES:
                fields[attribute] = coerce_sequence(value)
            elif attribute in _TEXT_OR_LIST:
                fields[attribute] = coerce_text_or_list(value)
            elif attribute in _EXACT_TEXT and isinstance(value, str):
                fields[attribute] = value
            elif attribute in _REQUIRED_TEXT or attribute in _OPTIONAL_TEXT:
                fields[attribute] = coerce_text(value)

        fields["extra"] = {k: v for k, v in payload.items() if k not in consumed}
        return JobRecord(**fields)


def coerce_text(value: Any) -> str:
    """Render a scalar or list value as a single stripped string."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (list, tuple)):
        return ", ".join(_label_of(item) for item in value if not _is_blank(item))
    if isinstance(value, Mapping):
        return _label_of(value)
    return str(value).strip()


def coerce_sequence(value: Any) -> Tuple[Any, ...]:
    """Coerce a tags-like value into a tuple of strings or labeled dicts.

    A missing value becomes (), a single string or object becomes a one-item
    tuple, and list items that are neither strings nor objects are stringified.
    """
    if value is None:
        return ()
    if isinstance(value, (str, Mapping)):
        items = [value]
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = list(value)
    else:
        items = [value]

    result = []
    for item in items:
        if _is_blank(item):
            continue
        if isinstance(item, str):
            result.append(item.strip())
        elif isinstance(item, Mapping):
            result.append(dict(item))
        else:
            result.append(str(item))
    return tuple(result)


def coerce_text_or_list(value: Any):
    """Keep strings as strings and lists as tuples (for requirement bullet lists)."""
    if isinstance(value, (list, tuple, set, frozenset)):
        return coerce_sequence(value)
    return coerce_text(value)


def _is_blank(item: Any) -> bool:
    return item is None or (isinstance(item, str) and not item.strip())


def _label_of(item: Any) -> str:
    if isinstance(item, Mapping):
        label = item.get("label")
        return str(label).strip() if label is not None else ""
    return str(item).strip()


_default_normalizer = JobNormalizer()


def record_from_provider(payload: Mapping) -> JobRecord:
    """Adapter for one external provider payload."""
    return _default_normalizer.from_provider(payload)


def record_from_store(payload: Mapping) -> JobRecord:
    """Adapter for one row read from the persistent store."""
    return _default_normalizer.from_store(payload)
