"""Alias-resolution table for loosely shaped job payloads.

The provider and the local store name the same attribute differently
(``title`` / ``position`` / ``job_title``). Each logical attribute maps to an
ordered chain of source keys; the first key holding a non-empty value wins.
The normalizer resolves every attribute through this table, and the search
engine matches over the resolved attributes listed in SEARCHABLE_ATTRIBUTES.
"""

from collections.abc import Mapping
from typing import Any, Dict, Optional, Tuple

FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("id", "job_id", "_id"),
    "title": ("title", "position", "job_title"),
    "company": ("company", "company_name"),
    "description": ("description", "job_description"),
    "location": ("location", "job_location", "city"),
    "category": ("category", "job_category"),
    "posted_at": ("posted_date", "postedDate", "posted_at", "created_at", "createdAt"),
    "tags": ("tags",),
    "skills": ("skills",),
    "requirements": ("requirements", "job_requirements"),
    "responsibilities": ("responsibilities", "job_responsibilities"),
    "application_url": ("application_url", "apply_url", "url"),
}

# Order in which the search engine inspects attributes
SEARCHABLE_ATTRIBUTES: Tuple[str, ...] = (
    "title",
    "company",
    "description",
    "location",
    "skills",
    "category",
    "tags",
    "requirements",
    "responsibilities",
)


def is_empty(value: Any) -> bool:
    """True for None, blank strings and empty containers."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, frozenset, Mapping)):
        return len(value) == 0
    return False


def resolve_alias(payload: Mapping, attribute: str) -> Tuple[Optional[str], Any]:
    """Walk the alias chain for ``attribute``.

    Returns:
        (source_key, value) for the first non-empty entry, or (None, None)

    Raises:
        KeyError: If ``attribute`` is not in FIELD_ALIASES
    """
    for key in FIELD_ALIASES[attribute]:
        value = payload.get(key)
        if not is_empty(value):
            return key, value
    return None, None
