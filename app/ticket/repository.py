# app/ticket/repository.py
from typing import Callable, Iterable

from app.ticket.schemas import Ticket

SaveHook = Callable[[tuple[Ticket, ...]], None]


class TicketRepository:
    """The sequence is only ever swapped as a whole, so a snapshot returned by
    ``get_all`` never changes under its reader.
    """

    def __init__(self, tickets: Iterable[Ticket] = (), on_replace: SaveHook | None = None) -> None:
        self._tickets: tuple[Ticket, ...] = tuple(tickets)
        self._on_replace = on_replace

    def __len__(self) -> int:
        return len(self._tickets)

    def get_all(self) -> tuple[Ticket, ...]:
        return self._tickets

    def get(self, ticket_id: str) -> Ticket | None:
        return next((t for t in self._tickets if t.id == ticket_id), None)

    def replace(self, tickets: Iterable[Ticket]) -> None:
        self._tickets = tuple(tickets)
        if self._on_replace is not None:
            self._on_replace(self._tickets)
