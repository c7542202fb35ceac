# app/ticket/services.py
import logging
import threading
from typing import Callable
from uuid import uuid4

from app.core.clock import now_iso
from app.core.errors import ConfirmationRequiredError, StorageWriteError
from app.ticket.persistence import TicketStorage
from app.ticket.query import derive_stats, derive_view
from app.ticket.repository import TicketRepository
from app.ticket.schemas import (
    Category,
    Priority,
    Status,
    Ticket,
    TicketCreate,
    TicketFilters,
    TicketStats,
    TicketUpdate,
)

LOGGER = logging.getLogger(__name__)


class TicketService:
    """Owns the ticket repository; mutations run under a single lock."""

    def __init__(
        self,
        storage: TicketStorage,
        *,
        clock: Callable[[], str] = now_iso,
        id_factory: Callable[[], str] = lambda: str(uuid4()),
    ) -> None:
        self._storage = storage
        self._clock = clock
        self._id_factory = id_factory
        self._lock = threading.Lock()
        tickets = storage.load()
        LOGGER.info("Loaded %d tickets from storage", len(tickets))
        self.repository = TicketRepository(tickets, on_replace=self._persist)

    def _persist(self, tickets: tuple[Ticket, ...]) -> None:
        try:
            self._storage.save(tickets)
        except StorageWriteError:
            LOGGER.exception("Ticket snapshot was not saved; %d tickets held in memory only", len(tickets))
            raise

    def _new_id(self) -> str:
        while True:
            ticket_id = self._id_factory()
            if self.repository.get(ticket_id) is None:
                return ticket_id

    def _touch(self, previous: str) -> str:
        # updatedAt never moves backwards, even if the wall clock does
        return max(self._clock(), previous)

    # reads

    def get_ticket(self, ticket_id: str) -> Ticket | None:
        return self.repository.get(ticket_id)

    @staticmethod
    def _view(tickets: tuple[Ticket, ...], filters: TicketFilters | None) -> list[Ticket]:
        filters = filters or TicketFilters()
        return derive_view(
            tickets,
            query=filters.query,
            priority_filter=filters.priority,
            status_filter=filters.status,
            category_filter=filters.category,
            sort_key=filters.sort,
        )

    def list_tickets(self, filters: TicketFilters | None = None) -> list[Ticket]:
        return self._view(self.repository.get_all(), filters)

    def stats(self) -> TicketStats:
        return derive_stats(self.repository.get_all())

    def board(self, filters: TicketFilters | None = None) -> tuple[list[Ticket], TicketStats]:
        snapshot = self.repository.get_all()
        return self._view(snapshot, filters), derive_stats(snapshot)

    # mutations

    def create_ticket(self, payload: TicketCreate) -> Ticket:
        with self._lock:
            now = self._clock()
            ticket = Ticket(
                id=self._new_id(),
                title=payload.title or "Untitled",
                description=payload.description or "",
                category=payload.category or Category.OTHER,
                priority=payload.priority or Priority.MEDIUM,
                status=payload.status or Status.OPEN,
                requester=payload.requester or "Anonymous",
                assignee=payload.assignee or "",
                created_at=now,
                updated_at=now,
            )
            self.repository.replace((ticket, *self.repository.get_all()))
        return ticket

    def update_ticket(self, ticket_id: str, payload: TicketUpdate) -> Ticket | None:
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        with self._lock:
            current = self.repository.get(ticket_id)
            if current is None:
                return None
            changes["updated_at"] = self._touch(current.updated_at)
            updated = current.model_copy(update=changes)
            self.repository.replace(
                updated if t.id == ticket_id else t for t in self.repository.get_all()
            )
        return updated

    def set_status(self, ticket_id: str, status: Status) -> Ticket | None:
        return self.update_ticket(ticket_id, TicketUpdate(status=status))

    def delete_ticket(self, ticket_id: str) -> bool:
        with self._lock:
            tickets = self.repository.get_all()
            remaining = [t for t in tickets if t.id != ticket_id]
            if len(remaining) == len(tickets):
                return False
            self.repository.replace(remaining)
        return True

    def clear_all(self, *, confirm: bool = False) -> int:
        if not confirm:
            raise ConfirmationRequiredError("clear_all called without confirm=True")
        with self._lock:
            removed = len(self.repository)
            self.repository.replace(())
        LOGGER.info("Cleared %d tickets", removed)
        return removed
