# listing_search/filters.py
"""Compile a ``ListingQuery`` into a SQLAlchemy predicate for one listing kind."""
from sqlalchemy import and_, or_, func, true

from .models import ListingStatus

MAX_SEARCH_TOKENS = 6


def search_tokens(q):
    """Lowercased whitespace tokens of ``q``; anything past the sixth is dropped."""
    if not q:
        return []
    return q.lower().split()[:MAX_SEARCH_TOKENS]


def compile_predicate(kind, query):
    conds = [kind.column("status") == ListingStatus.ACTIVE.value]

    for field in kind.filter_fields:
        value = getattr(query, field)
        if value is not None:
            conds.append(func.lower(kind.column(field)) == value.lower())

    if query.featured_only:
        conds.append(kind.column("featured").is_(true()))

    # a null price never satisfies a bound
    price = kind.column("price")
    if query.min_price is not None:
        conds.append(price >= query.min_price)
    if query.max_price is not None:
        conds.append(price <= query.max_price)

    for token in search_tokens(query.q):
        conds.append(or_(*[
            kind.column(field).icontains(token, autoescape=True)
            for field in kind.search_fields
        ]))

    return and_(*conds)
