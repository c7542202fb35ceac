# app/ticket/persistence.py
import json
import logging
from typing import Sequence

from pydantic import TypeAdapter, ValidationError

from app.core.errors import StorageReadError
from app.storage.store import KeyValueStore
from app.ticket.schemas import Ticket

LOGGER = logging.getLogger(__name__)

_TICKET_LIST = TypeAdapter(list[Ticket])


class TicketStorage:
    """Reads and writes the full ticket snapshot under a single key."""

    def __init__(self, store: KeyValueStore, key: str) -> None:
        self._store = store
        self._key = key

    def load(self) -> list[Ticket]:
        try:
            raw = self._store.get(self._key)
        except StorageReadError:
            LOGGER.warning("Could not read stored tickets under %r, starting empty", self._key, exc_info=True)
            return []
        if not raw:
            return []
        try:
            parsed = json.loads(raw)
        except (ValueError, RecursionError):
            LOGGER.warning("Stored tickets under %r are not valid JSON, starting empty", self._key)
            return []
        if not isinstance(parsed, list):
            LOGGER.warning("Stored tickets under %r are not a list, starting empty", self._key)
            return []
        try:
            tickets = _TICKET_LIST.validate_python(parsed)
        except ValidationError as exc:
            LOGGER.warning(
                "Stored tickets under %r failed validation (%d errors), starting empty",
                self._key,
                exc.error_count(),
            )
            return []
        if len({t.id for t in tickets}) != len(tickets):
            LOGGER.warning("Stored tickets under %r contain duplicate ids, starting empty", self._key)
            return []
        return tickets

    def save(self, tickets: Sequence[Ticket]) -> None:
        payload = _TICKET_LIST.dump_json(list(tickets), by_alias=True).decode("utf-8")
        self._store.set(self._key, payload)
        LOGGER.debug("Saved %d tickets under %r", len(tickets), self._key)
