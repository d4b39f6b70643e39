# listing_search/crud.py
"""Read-only store operations used by the search engine.

Each helper runs one statement on the given session. Failures propagate as
SQLAlchemy errors; deciding what a failure means is left to the caller.
"""
from sqlalchemy import select, func
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Sequence, Tuple


def count_listings(db: Session, model, predicate) -> int:
    stmt = select(func.count()).select_from(model).where(predicate)
    return int(db.execute(stmt).scalar_one())


def select_listings(
    db: Session,
    model,
    predicate,
    order: Sequence,
    offset: int,
    limit: int,
    projection: Sequence[str],
) -> List[Dict[str, Any]]:
    cols = [getattr(model, name) for name in projection]
    stmt = select(*cols).where(predicate).order_by(*order).offset(offset).limit(limit)
    return [dict(row._mapping) for row in db.execute(stmt)]


def group_by_count(db: Session, model, dimension: str, predicate) -> List[Tuple[Any, int]]:
    col = getattr(model, dimension)
    stmt = (
        select(col, func.count())
        .select_from(model)
        .where(predicate)
        .where(col.is_not(None))
        .group_by(col)
    )
    return [(value, int(count)) for value, count in db.execute(stmt)]
