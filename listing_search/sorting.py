# listing_search/sorting.py
"""Sort keyword resolution.

Every order ends with ``id desc`` so that rows sharing the other sort keys
still come back in one fixed order and offset pagination never skips or
repeats a row.
"""
ASC = "asc"
DESC = "desc"

_ORDERS = {
    "newest": [("created_at", DESC)],
    "featured": [("featured", DESC), ("created_at", DESC)],
    "price_asc": [("price", ASC), ("created_at", DESC)],
    "price_desc": [("price", DESC), ("created_at", DESC)],
}

TIE_BREAK = ("id", DESC)


def resolve_order(sort):
    """Return the ``(field, direction)`` list for ``sort``; unknown keys sort newest first."""
    return _ORDERS.get(sort, _ORDERS["newest"]) + [TIE_BREAK]


def order_clauses(kind, order):
    clauses = []
    for field, direction in order:
        col = kind.column(field)
        clause = col.asc() if direction == ASC else col.desc()
        # price is nullable; rows without one go last in both directions
        if field == "price":
            clause = clause.nulls_last()
        clauses.append(clause)
    return clauses
