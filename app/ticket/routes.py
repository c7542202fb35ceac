# app/ticket/routes.py
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from app.ticket.schemas import (
    ALL,
    DEFAULT_SORT,
    Category,
    Priority,
    SortKey,
    SortOption,
    Status,
    StatusChange,
    Ticket,
    TicketBoard,
    TicketEditForm,
    TicketFilters,
    TicketForm,
    TicketOptions,
    TicketStats,
)
from app.ticket.services import TicketService

router = APIRouter(prefix="/tickets", tags=["Tickets"])


def get_ticket_service(request: Request) -> TicketService:
    return request.app.state.ticket_service


def get_filters(
    q: str = Query(default="", description="Text searched in title, description, requester and assignee"),
    priority: str = Query(default=ALL),
    status: str = Query(default=ALL),
    category: str = Query(default=ALL),
    sort: str = Query(default=DEFAULT_SORT.value, description="e.g. updatedAt_desc, priority_asc"),
) -> TicketFilters:
    return TicketFilters(query=q, priority=priority, status=status, category=category, sort=sort)


@router.get("", response_model=list[Ticket])
def list_all(
    filters: TicketFilters = Depends(get_filters),
    service: TicketService = Depends(get_ticket_service),
):
    return service.list_tickets(filters)


@router.get("/stats", response_model=TicketStats)
def stats(service: TicketService = Depends(get_ticket_service)):
    return service.stats()


@router.get("/board", response_model=TicketBoard)
def board(
    filters: TicketFilters = Depends(get_filters),
    service: TicketService = Depends(get_ticket_service),
):
    tickets, summary = service.board(filters)
    return TicketBoard(tickets=tickets, stats=summary)


@router.get("/options", response_model=TicketOptions)
def options():
    return TicketOptions(
        categories=list(Category),
        priorities=list(Priority),
        statuses=list(Status),
        sort_modes=[SortOption(value=key.value, label=key.label) for key in SortKey],
    )


@router.post("", response_model=Ticket, status_code=201)
def create(ticket: TicketForm, service: TicketService = Depends(get_ticket_service)):
    return service.create_ticket(ticket)


@router.delete("", status_code=204)
def clear_all(
    confirm: bool = Query(default=False, description="Must be true to remove every ticket"),
    service: TicketService = Depends(get_ticket_service),
):
    service.clear_all(confirm=confirm)
    return Response(status_code=204)


@router.get("/{ticket_id}", response_model=Ticket)
def get(ticket_id: str, service: TicketService = Depends(get_ticket_service)):
    ticket = service.get_ticket(ticket_id)
    if not ticket:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return ticket


@router.put("/{ticket_id}", response_model=Ticket)
def update(ticket_id: str, ticket: TicketEditForm, service: TicketService = Depends(get_ticket_service)):
    updated = service.update_ticket(ticket_id, ticket)
    if not updated:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return updated


@router.post("/{ticket_id}/status", response_model=Ticket)
def set_status(ticket_id: str, change: StatusChange, service: TicketService = Depends(get_ticket_service)):
    updated = service.set_status(ticket_id, change.status)
    if not updated:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return updated


@router.delete("/{ticket_id}", status_code=204)
def delete(ticket_id: str, service: TicketService = Depends(get_ticket_service)):
    # deleting an unknown id is a no-op, not an error
    service.delete_ticket(ticket_id)
    return Response(status_code=204)
