"""Offset/limit slicing with total and has-more reporting."""

from dataclasses import dataclass, field
from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One slice of a larger result list.

    Attributes:
        data: Items in the slice
        total: Length of the full list
        has_more: True when items exist past this slice
    """

    data: List[T] = field(default_factory=list)
    total: int = 0
    has_more: bool = False


def paginate(items: Sequence[T], limit: int, offset: int) -> Page[T]:
    """Slice ``items[offset:offset + limit]``.

    limit and offset are assumed to be validated by the caller
    (limit >= 1, offset >= 0).
    """
    total = len(items)
    return Page(
        data=list(items[offset:offset + limit]),
        total=total,
        has_more=offset + limit < total,
    )
