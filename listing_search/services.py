# listing_search/services.py
"""The faceted listing search engine.

``search_listings`` runs every sub-query on the caller's session, one after the
other. ``search_listings_parallel`` runs the count, the page and each facet
dimension on a thread pool, each on its own session. Both build the same
``PageResult`` from the same compiled predicate.
"""
import math
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Dict, Mapping, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import crud
from .filters import compile_predicate, search_tokens
from .kinds import FacetDimension, ListingKind
from .normalize import normalize_query
from .schemas import FacetEntry, ListingQuery, PageResult
from .sorting import order_clauses, resolve_order
from .utils import logger

PARALLEL_QUERIES = os.getenv("LISTINGS_PARALLEL_QUERIES", "0") == "1"
QUERY_WORKERS = int(os.getenv("LISTINGS_QUERY_WORKERS", "4"))
FACET_TIMEOUT = float(os.getenv("LISTINGS_FACET_TIMEOUT", "2.0"))
CANCEL_POLL = 0.05


class ListingQueryError(Exception):
    """The count or page query failed; the request cannot be answered."""


class SearchCancelled(ListingQueryError):
    """The caller gave up on the request before its sub-queries finished."""


def plan_search(kind: ListingKind, params: Optional[Mapping]):
    query = normalize_query(params)
    predicate = compile_predicate(kind, query)
    order = order_clauses(kind, resolve_order(query.sort))
    logger.debug(
        "%s search: sort=%s page=%d pageSize=%d tokens=%d facets=%s",
        kind.name, query.sort, query.page, query.page_size,
        len(search_tokens(query.q)), query.include_facets,
    )
    return query, predicate, order


def fetch_page(db: Session, kind: ListingKind, query: ListingQuery, predicate, order):
    offset = (query.page - 1) * query.page_size
    rows = crud.select_listings(
        db, kind.model, predicate, order, offset, query.page_size, kind.projection
    )
    return tuple(kind.to_item(row) for row in rows)


def build_facet(dimension: FacetDimension, groups) -> Tuple[FacetEntry, ...]:
    """Drop empty values, order by count (then value) and cap to the dimension limit."""
    entries = [(str(value), count) for value, count in groups if value not in (None, "")]
    entries.sort(key=lambda e: (-e[1], e[0]))
    return tuple(FacetEntry(value=v, count=c) for v, c in entries[: dimension.limit])


def aggregate_facets(db: Session, kind: ListingKind, predicate) -> Dict[str, Tuple[FacetEntry, ...]]:
    facets = {}
    for dim in kind.facets:
        try:
            groups = crud.group_by_count(db, kind.model, dim.field, predicate)
        except SQLAlchemyError as e:
            logger.warning("Facet %s.%s failed: %s", kind.name, dim.key, e)
            # clear the failed statement so the remaining dimensions can run
            db.rollback()
            groups = []
        facets[dim.key] = build_facet(dim, groups)
    return facets


def assemble_page(query: ListingQuery, total: int, items, facets=None) -> PageResult:
    return PageResult(
        page=query.page,
        page_size=query.page_size,
        total=total,
        total_pages=max(1, math.ceil(total / query.page_size)),
        items=tuple(items),
        facets=facets if query.include_facets else None,
    )


def _log_done(kind, result, started):
    logger.info(
        "%s search: total=%d items=%d in %.1fms",
        kind.name, result.total, len(result.items), (time.perf_counter() - started) * 1000,
    )


def search_listings(db: Session, kind: ListingKind, params: Optional[Mapping]) -> PageResult:
    started = time.perf_counter()
    query, predicate, order = plan_search(kind, params)
    try:
        total = crud.count_listings(db, kind.model, predicate)
        items = fetch_page(db, kind, query, predicate, order)
    except SQLAlchemyError as e:
        logger.exception("%s search failed: %s", kind.name, e)
        raise ListingQueryError("query failed") from e

    facets = aggregate_facets(db, kind, predicate) if query.include_facets else None
    result = assemble_page(query, total, items, facets)
    _log_done(kind, result, started)
    return result


def _await(fut, cancel=None, deadline=None):
    """Wait for ``fut``, giving up when ``cancel`` is set or ``deadline`` passes."""
    while True:
        if cancel is not None and cancel.is_set():
            fut.cancel()
            raise SearchCancelled("search cancelled")
        wait = CANCEL_POLL
        if deadline is not None:
            wait = min(wait, max(0.0, deadline - time.monotonic()))
        try:
            return fut.result(timeout=wait)
        except FutureTimeout:
            if deadline is not None and time.monotonic() >= deadline:
                raise


def _in_session(session_factory, fn, *args):
    db = session_factory()
    try:
        return fn(db, *args)
    finally:
        db.close()


def search_listings_parallel(
    session_factory,
    kind: ListingKind,
    params: Optional[Mapping],
    *,
    max_workers: Optional[int] = None,
    facet_timeout: Optional[float] = None,
    cancel: Optional[threading.Event] = None,
) -> PageResult:
    """Run the sub-queries of one search concurrently.

    Setting ``cancel`` from another thread abandons the request: pending
    sub-queries are dropped and ``SearchCancelled`` is raised instead of a result.
    """
    started = time.perf_counter()
    query, predicate, order = plan_search(kind, params)
    timeout = FACET_TIMEOUT if facet_timeout is None else facet_timeout

    pool = ThreadPoolExecutor(
        max_workers=max_workers or QUERY_WORKERS, thread_name_prefix="listing-search"
    )
    try:
        total_f = pool.submit(_in_session, session_factory, crud.count_listings, kind.model, predicate)
        items_f = pool.submit(_in_session, session_factory, fetch_page, kind, query, predicate, order)
        facet_fs = {}
        if query.include_facets:
            for dim in kind.facets:
                facet_fs[dim] = pool.submit(
                    _in_session, session_factory, crud.group_by_count, kind.model, dim.field, predicate
                )
        deadline = time.monotonic() + timeout

        try:
            total = _await(total_f, cancel)
            items = _await(items_f, cancel)
        except SQLAlchemyError as e:
            logger.exception("%s search failed: %s", kind.name, e)
            raise ListingQueryError("query failed") from e

        facets = None
        if query.include_facets:
            facets = {}
            for dim, fut in facet_fs.items():
                try:
                    groups = _await(fut, cancel, deadline)
                except FutureTimeout:
                    fut.cancel()
                    logger.warning("Facet %s.%s timed out after %.1fs", kind.name, dim.key, timeout)
                    groups = []
                except SearchCancelled:
                    raise
                except Exception as e:
                    logger.warning("Facet %s.%s failed: %s", kind.name, dim.key, e)
                    groups = []
                facets[dim.key] = build_facet(dim, groups)
    finally:
        # pending sub-queries of a failed request are dropped, not awaited
        pool.shutdown(wait=False, cancel_futures=True)

    result = assemble_page(query, total, items, facets)
    _log_done(kind, result, started)
    return result


def search(db: Session, session_factory, kind: ListingKind, params: Optional[Mapping]) -> PageResult:
    """Entry point for the HTTP layer; picks the execution mode from configuration."""
    if PARALLEL_QUERIES:
        return search_listings_parallel(session_factory, kind, params)
    return search_listings(db, kind, params)
