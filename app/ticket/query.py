# app/ticket/query.py
from typing import Callable, Iterable, Sequence

from app.ticket.schemas import (
    ALL,
    DEFAULT_SORT,
    Priority,
    SortKey,
    Status,
    Ticket,
    TicketStats,
)


def _searchable_fields(ticket: Ticket) -> tuple[str | None, ...]:
    return (ticket.title, ticket.description, ticket.requester, ticket.assignee)


def matches_query(ticket: Ticket, query: str) -> bool:
    """True when any non-empty searchable field contains ``query`` (already folded)."""
    for value in _searchable_fields(ticket):
        if value and query in value.casefold():
            return True
    return False


def _resolve_sort(sort_key: SortKey | str) -> SortKey:
    try:
        return SortKey(sort_key)
    except ValueError:
        return DEFAULT_SORT


_SORT_FIELDS: dict[SortKey, tuple[Callable[[Ticket], object], bool]] = {
    SortKey.CREATED_AT_ASC: (lambda t: t.created_at, False),
    SortKey.CREATED_AT_DESC: (lambda t: t.created_at, True),
    SortKey.UPDATED_AT_ASC: (lambda t: t.updated_at, False),
    SortKey.UPDATED_AT_DESC: (lambda t: t.updated_at, True),
    SortKey.PRIORITY_ASC: (lambda t: t.priority.rank, False),
    SortKey.PRIORITY_DESC: (lambda t: t.priority.rank, True),
}


def derive_view(
    tickets: Iterable[Ticket],
    query: str = "",
    priority_filter: str = ALL,
    status_filter: str = ALL,
    category_filter: str = ALL,
    sort_key: SortKey | str = DEFAULT_SORT,
) -> list[Ticket]:
    items = list(tickets)

    q = (query or "").strip().casefold()
    if q:
        items = [t for t in items if matches_query(t, q)]
    if priority_filter != ALL:
        items = [t for t in items if t.priority == priority_filter]
    if status_filter != ALL:
        items = [t for t in items if t.status == status_filter]
    if category_filter != ALL:
        items = [t for t in items if t.category == category_filter]

    # sorted() is stable, including with reverse=True
    key, reverse = _SORT_FIELDS[_resolve_sort(sort_key)]
    return sorted(items, key=key, reverse=reverse)


def derive_stats(tickets: Sequence[Ticket]) -> TicketStats:
    by_status = {status: 0 for status in Status}
    by_priority = {priority: 0 for priority in Priority}
    for ticket in tickets:
        by_status[ticket.status] += 1
        by_priority[ticket.priority] += 1
    return TicketStats(total=len(tickets), by_status=by_status, by_priority=by_priority)
