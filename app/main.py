# app/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.core.database import create_db_engine, create_session_factory, init_db
from app.core.errors import ConfirmationRequiredError, HelpdeskError, StorageWriteError
from app.core.logging import configure_logging
from app.storage.store import KeyValueStore, MemoryKeyValueStore, SqlKeyValueStore
from app.ticket.persistence import TicketStorage
from app.ticket.routes import router as ticket_router
from app.ticket.services import TicketService

LOGGER = logging.getLogger(__name__)

_ERROR_STATUS = {
    ConfirmationRequiredError: 400,
    StorageWriteError: 503,
}


def build_store(settings: Settings) -> KeyValueStore:
    if settings.STORAGE_BACKEND == "memory":
        return MemoryKeyValueStore()
    engine = create_db_engine(settings.DATABASE_URL)
    init_db(engine)
    return SqlKeyValueStore(create_session_factory(engine))


def create_app(settings: Settings | None = None, store: KeyValueStore | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESC,
        version=settings.APP_VERSION,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    storage = TicketStorage(store or build_store(settings), settings.STORAGE_KEY)
    app.state.ticket_service = TicketService(storage)

    @app.exception_handler(HelpdeskError)
    async def helpdesk_error_handler(request: Request, exc: HelpdeskError):
        status_code = _ERROR_STATUS.get(type(exc), 500)
        LOGGER.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": exc.user_message})

    # Routers
    app.include_router(ticket_router)

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok"}

    return app


app = create_app()
