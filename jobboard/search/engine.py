"""Case-insensitive substring search over a merged job view.

A record matches when any searchable attribute contains the term:

- strings: plain substring test
- tags/skills/bullet lists: any string item contains the term, or any
  object item has a ``label`` containing it
- other scalars: substring of their string form

Attributes are inspected in SEARCHABLE_ATTRIBUTES order, each holding the
first non-empty value of its alias chain (resolved during normalization).
Filtering never mutates the view and preserves its order.
"""

from collections.abc import Mapping
from typing import Any, Sequence, Tuple

from jobboard.domain.models import JobRecord
from jobboard.normalization.aliases import SEARCHABLE_ATTRIBUTES, is_empty


def normalize_term(term: str) -> str:
    return (term or "").strip().lower()


def value_matches(value: Any, needle: str) -> bool:
    """True if ``value`` contains the already-lowercased ``needle``."""
    if isinstance(value, str):
        return needle in value.lower()
    if isinstance(value, (list, tuple)):
        return any(_item_matches(item, needle) for item in value)
    return needle in str(value).lower()


def _item_matches(item: Any, needle: str) -> bool:
    if isinstance(item, str):
        return needle in item.lower()
    if isinstance(item, Mapping):
        label = item.get("label")
        return isinstance(label, str) and needle in label.lower()
    return False


class SearchEngine:
    """Filters views by a free-text term."""

    def __init__(self, attributes: Tuple[str, ...] = SEARCHABLE_ATTRIBUTES):
        self.attributes = attributes

    def matches(self, record: JobRecord, needle: str) -> bool:
        for attribute in self.attributes:
            value = getattr(record, attribute, None)
            if is_empty(value):
                continue
            if value_matches(value, needle):
                return True
        return False

    def search(self, view: Sequence[JobRecord], term: str) -> Sequence[JobRecord]:
        """Records of ``view`` matching ``term``.

        A blank or whitespace-only term returns ``view`` itself.
        """
        needle = normalize_term(term)
        if not needle:
            return view
        return tuple(record for record in view if self.matches(record, needle))


_default_engine = SearchEngine()


def search(view: Sequence[JobRecord], term: str) -> Sequence[JobRecord]:
    return _default_engine.search(view, term)
