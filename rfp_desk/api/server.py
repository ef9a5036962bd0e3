"""FastAPI application: routers, error mapping and the mailbox poller lifecycle."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from rfp_desk import __version__
from rfp_desk.api.routes.email import router as email_router
from rfp_desk.api.routes.proposals import router as proposals_router
from rfp_desk.api.routes.rfps import router as rfps_router
from rfp_desk.api.routes.vendors import router as vendors_router
from rfp_desk.db import init_db
from rfp_desk.errors import ConflictError, InvalidRfpError, MailNotConfiguredError, NotFoundError
from rfp_desk.ingestion.poller import MailboxPoller
from rfp_desk.utils.logger import get_logger

logger = get_logger("rfp_desk.api.server")

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (ConflictError, 409),
    (InvalidRfpError, 400),
    (MailNotConfiguredError, 503),
    (ValueError, 400),
)


@asynccontextmanager
async def _lifespan(app: FastAPI, start_poller: bool) -> AsyncIterator[None]:
    init_db()
    poller: Optional[MailboxPoller] = getattr(app.state, "poller", None)
    if start_poller:
        if poller is None:
            poller = MailboxPoller.from_config()
            app.state.poller = poller
        # IMAP login blocks; keep it off the event loop
        if await asyncio.to_thread(poller.connect):
            poller.start()
            logger.info("api.lifespan.poller_started")
    logger.info("api.lifespan.ready")
    try:
        yield
    finally:
        if poller is not None:
            await poller.stop()
        logger.info("api.lifespan.stopped")


def _register_error_handlers(app: FastAPI) -> None:
    for exc_type, status_code in _STATUS_BY_ERROR:

        async def handler(request: Request, exc: Exception, status_code: int = status_code) -> JSONResponse:
            logger.info(
                "api.request_error",
                path=request.url.path,
                status_code=status_code,
                error=str(exc),
            )
            return JSONResponse(status_code=status_code, content={"detail": str(exc)})

        app.add_exception_handler(exc_type, handler)


def create_app(poller: Optional[MailboxPoller] = None, start_poller: bool = True) -> FastAPI:
    """Create the API app.

    If poller is None the lifespan builds one from IMAP config. With start_poller=False the
    lifespan leaves the poller alone (tests connect fakes themselves).
    """
    app = FastAPI(
        title="RFP Desk",
        version=__version__,
        lifespan=lambda app: _lifespan(app, start_poller=start_poller),
    )
    app.state.poller = poller

    app.include_router(vendors_router)
    app.include_router(rfps_router)
    app.include_router(proposals_router)
    app.include_router(email_router)
    _register_error_handlers(app)

    @app.get("/health")
    async def health() -> dict[str, object]:
        current = getattr(app.state, "poller", None)
        return {
            "status": "ok",
            "mail_polling": bool(current is not None and current.enabled),
        }

    return app
