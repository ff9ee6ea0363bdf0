"""Normalization of heterogeneous job payloads into JobRecord."""

from .aliases import FIELD_ALIASES, SEARCHABLE_ATTRIBUTES, is_empty, resolve_alias
from .service import (
    JobNormalizer,
    coerce_sequence,
    coerce_text,
    record_from_provider,
    record_from_store,
)

__all__ = [
    "FIELD_ALIASES",
    "SEARCHABLE_ATTRIBUTES",
    "JobNormalizer",
    "coerce_sequence",
    "coerce_text",
    "is_empty",
    "record_from_provider",
    "record_from_store",
    "resolve_alias",
]
