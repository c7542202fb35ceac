# app/ticket/schemas.py
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

ALL = "All"


class Category(str, Enum):
    HARDWARE = "Hardware"
    SOFTWARE = "Software"
    NETWORK = "Network"
    ACCOUNT_ACCESS = "Account/Access"
    SECURITY = "Security"
    OTHER = "Other"


class Priority(str, Enum):
    """Ticket urgency; declaration order is the sort order, lowest first."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {priority: index for index, priority in enumerate(Priority)}


class Status(str, Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    WAITING = "Waiting"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


class SortKey(str, Enum):
    UPDATED_AT_DESC = "updatedAt_desc"
    UPDATED_AT_ASC = "updatedAt_asc"
    CREATED_AT_DESC = "createdAt_desc"
    CREATED_AT_ASC = "createdAt_asc"
    PRIORITY_DESC = "priority_desc"
    PRIORITY_ASC = "priority_asc"

    @property
    def label(self) -> str:
        return _SORT_LABELS[self]


_SORT_LABELS = {
    SortKey.UPDATED_AT_DESC: "Last updated (newest)",
    SortKey.UPDATED_AT_ASC: "Last updated (oldest)",
    SortKey.CREATED_AT_DESC: "Created (newest)",
    SortKey.CREATED_AT_ASC: "Created (oldest)",
    SortKey.PRIORITY_DESC: "Priority (high → low)",
    SortKey.PRIORITY_ASC: "Priority (low → high)",
}

DEFAULT_SORT = SortKey.UPDATED_AT_DESC


class Ticket(BaseModel):
    # frozen: updates build a new copy
    id: str
    title: str
    description: str = ""
    category: Category = Category.OTHER
    priority: Priority = Priority.MEDIUM
    status: Status = Status.OPEN
    requester: str
    assignee: str = ""
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class TicketCreate(BaseModel):
    # missing or empty values fall back to ticket defaults
    title: str | None = None
    description: str | None = None
    category: Category | None = None
    priority: Priority | None = None
    status: Status | None = None
    requester: str | None = None
    assignee: str | None = None


class TicketUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    category: Category | None = None
    priority: Priority | None = None
    status: Status | None = None
    requester: str | None = None
    assignee: str | None = None


class TicketForm(TicketCreate):
    title: str = Field(..., min_length=1)
    requester: str = Field(..., min_length=1)


class TicketEditForm(TicketUpdate):
    title: str | None = Field(default=None, min_length=1)
    requester: str | None = Field(default=None, min_length=1)


class StatusChange(BaseModel):
    status: Status


class TicketFilters(BaseModel):
    query: str = ""
    priority: str = ALL
    status: str = ALL
    category: str = ALL
    sort: str = DEFAULT_SORT.value


class TicketStats(BaseModel):
    total: int
    by_status: dict[Status, int] = Field(alias="byStatus")
    by_priority: dict[Priority, int] = Field(alias="byPriority")

    model_config = ConfigDict(populate_by_name=True)


class TicketBoard(BaseModel):
    tickets: list[Ticket]
    stats: TicketStats


class SortOption(BaseModel):
    value: str
    label: str


class TicketOptions(BaseModel):
    categories: list[Category]
    priorities: list[Priority]
    statuses: list[Status]
    sort_modes: list[SortOption] = Field(alias="sortModes")

    model_config = ConfigDict(populate_by_name=True)
