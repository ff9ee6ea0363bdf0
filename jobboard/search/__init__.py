"""Search and pagination over merged job views."""

from .engine import SearchEngine, normalize_term, search, value_matches
from .pagination import Page, paginate

__all__ = ["SearchEngine", "search", "normalize_term", "value_matches", "Page", "paginate"]
