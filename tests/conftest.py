# tests/conftest.py
import os
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

# keep app.main's module-level app off the on-disk database
os.environ.setdefault("STORAGE_BACKEND", "memory")

from app.core.config import Settings
from app.main import create_app
from app.storage.store import MemoryKeyValueStore
from app.ticket.persistence import TicketStorage
from app.ticket.services import TicketService

STORAGE_KEY = "helpdesk_tickets_v1"


class StepClock:
    """Returns a strictly increasing ISO timestamp on every call."""

    def __init__(self, start=datetime(2024, 1, 1, tzinfo=timezone.utc), step=timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> str:
        value = self.current.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        self.current += self.step
        return value


class CountingStore(MemoryKeyValueStore):
    def __init__(self, initial=None):
        super().__init__(initial)
        self.writes = 0

    def set(self, key, value):
        self.writes += 1
        super().set(key, value)


@pytest.fixture
def store():
    return CountingStore()


@pytest.fixture
def storage(store):
    return TicketStorage(store, STORAGE_KEY)


@pytest.fixture
def service(storage):
    return TicketService(storage, clock=StepClock())


@pytest.fixture
def client(store):
    settings = Settings(STORAGE_BACKEND="memory", _env_file=None)
    app = create_app(settings, store=store)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_service(storage):
    def factory(**kwargs):
        kwargs.setdefault("clock", StepClock())
        return TicketService(storage, **kwargs)

    return factory
