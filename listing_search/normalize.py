# listing_search/normalize.py
"""Turn an untrusted parameter map into a ``ListingQuery``.

Nothing in here raises on bad input: malformed values fall back to their
defaults or are dropped.
"""
from collections.abc import Mapping
from typing import Any

from .schemas import ListingQuery
from .utils import clean_text, parse_int, parse_flag, clamp

DEFAULT_PAGE = 1
MAX_PAGE = 10_000
DEFAULT_PAGE_SIZE = 24
MAX_PAGE_SIZE = 100
SORT_KEYS = ("newest", "featured", "price_asc", "price_desc")
TEXT_PARAMS = ("q", "category", "subcategory", "brand", "condition")


def _first(raw: Mapping, key: str) -> Any:
    value = raw.get(key)
    # repeated query-string keys arrive as lists; the first one wins
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _sort_key(value) -> str:
    text = clean_text(value)
    if text and text.lower() in SORT_KEYS:
        return text.lower()
    return "newest"


def normalize_query(raw: Mapping | None) -> ListingQuery:
    if not isinstance(raw, Mapping):
        raw = {}

    texts = {name: clean_text(_first(raw, name)) for name in TEXT_PARAMS}

    page = parse_int(_first(raw, "page"))
    page_size = parse_int(_first(raw, "pageSize"))

    return ListingQuery(
        **texts,
        featured_only=parse_flag(_first(raw, "featuredOnly")),
        min_price=parse_int(_first(raw, "minPrice")),
        max_price=parse_int(_first(raw, "maxPrice")),
        sort=_sort_key(_first(raw, "sort")),
        page=DEFAULT_PAGE if page is None else clamp(page, 1, MAX_PAGE),
        page_size=DEFAULT_PAGE_SIZE if page_size is None else clamp(page_size, 1, MAX_PAGE_SIZE),
        include_facets=parse_flag(_first(raw, "includeFacets")),
    )
