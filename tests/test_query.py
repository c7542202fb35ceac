# tests/test_query.py
import pytest

from app.ticket.query import derive_stats, derive_view
from app.ticket.schemas import Priority, SortKey, Status, Ticket


def make_ticket(ticket_id, **overrides):
    data = {
        "id": ticket_id,
        "title": ticket_id,
        "requester": "someone",
        "createdAt": "2024-01-01T00:00:00.000Z",
        "updatedAt": "2024-01-01T00:00:00.000Z",
    }
    data.update(overrides)
    return Ticket.model_validate(data)


def ids(tickets):
    return [t.id for t in tickets]


def test_priority_desc_orders_critical_first():
    a = make_ticket("A", priority="Low", updatedAt="2024-01-01T00:00:00Z")
    b = make_ticket("B", priority="Critical", updatedAt="2024-01-02T00:00:00Z")

    assert ids(derive_view([a, b], sort_key="priority_desc")) == ["B", "A"]


def test_query_matches_description_only_ticket():
    jam = make_ticket("jam", title="Broken device", description="printer jam")
    reset = make_ticket("reset", title="Password reset")

    assert ids(derive_view([jam, reset], query="printer")) == ["jam"]


def test_query_is_trimmed_and_case_insensitive():
    t = make_ticket("t", assignee="Maria Lopez")

    assert ids(derive_view([t], query="  MARIA ")) == ["t"]


def test_empty_fields_do_not_match_everything():
    t = make_ticket("t", description="", assignee="")

    assert derive_view([t], query="x") == []


def test_blank_query_keeps_all():
    tickets = [make_ticket("a"), make_ticket("b")]

    assert len(derive_view(tickets, query="   ")) == 2


def test_exact_match_filters_combine():
    a = make_ticket("a", priority="High", status="Open", category="Network")
    b = make_ticket("b", priority="High", status="Closed", category="Network")
    c = make_ticket("c", priority="Low", status="Open", category="Network")
    d = make_ticket("d", priority="High", status="Open", category="Security")

    view = derive_view(
        [a, b, c, d], priority_filter="High", status_filter="Open", category_filter="Network"
    )
    assert ids(view) == ["a"]


@pytest.mark.parametrize("sort_key", list(SortKey))
def test_sort_is_stable_for_equal_keys(sort_key):
    tickets = [make_ticket(name, priority="High") for name in ("first", "second", "third")]

    assert ids(derive_view(tickets, sort_key=sort_key)) == ["first", "second", "third"]


def test_timestamp_sorts():
    old = make_ticket("old", createdAt="2024-01-01T00:00:00.000Z", updatedAt="2024-03-01T00:00:00.000Z")
    new = make_ticket("new", createdAt="2024-02-01T00:00:00.000Z", updatedAt="2024-02-01T00:00:00.000Z")

    assert ids(derive_view([old, new], sort_key=SortKey.CREATED_AT_ASC)) == ["old", "new"]
    assert ids(derive_view([old, new], sort_key=SortKey.CREATED_AT_DESC)) == ["new", "old"]
    assert ids(derive_view([old, new], sort_key=SortKey.UPDATED_AT_ASC)) == ["new", "old"]
    assert ids(derive_view([old, new])) == ["old", "new"]


def test_unknown_sort_falls_back_to_updated_desc():
    a = make_ticket("a", updatedAt="2024-01-01T00:00:00.000Z")
    b = make_ticket("b", updatedAt="2024-01-05T00:00:00.000Z")

    assert ids(derive_view([a, b], sort_key="nonsense")) == ["b", "a"]


def test_derive_view_is_deterministic_and_leaves_input_alone():
    tickets = [
        make_ticket("a", priority="Low"),
        make_ticket("b", priority="Critical"),
        make_ticket("c", priority="Medium"),
    ]
    before = list(tickets)

    first = derive_view(tickets, sort_key="priority_asc")
    second = derive_view(tickets, sort_key="priority_asc")

    assert first == second
    assert ids(first) == ["a", "c", "b"]
    assert tickets == before


def test_stats_on_empty_repository():
    stats = derive_stats([])

    assert stats.total == 0
    assert stats.by_status == {status: 0 for status in Status}
    assert stats.by_priority == {priority: 0 for priority in Priority}


def test_stats_count_every_ticket():
    tickets = [
        make_ticket("a", status="Open", priority="High"),
        make_ticket("b", status="Open", priority="Low"),
        make_ticket("c", status="In Progress", priority="High"),
    ]

    stats = derive_stats(tickets)

    assert stats.total == 3
    assert stats.by_status[Status.OPEN] == 2
    assert stats.by_status[Status.IN_PROGRESS] == 1
    assert stats.by_status[Status.RESOLVED] == 0
    assert stats.by_priority[Priority.HIGH] == 2
    assert stats.model_dump(by_alias=True, mode="json")["byStatus"]["In Progress"] == 1
