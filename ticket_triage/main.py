import logging
import time

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ticket_triage.api.routes import router, tickets_router
from ticket_triage.core.config import settings
from ticket_triage.core.errors import InvalidTransitionError, NotFoundError
from ticket_triage.core.log_config import setup_logging
from ticket_triage.deps import build_ticket_service
from ticket_triage.services.ticket_service import TicketService

load_dotenv()
logger = logging.getLogger(__name__)

_ERROR_STATUS: dict[type[Exception], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
}


def _register_exception_handlers(app: FastAPI) -> None:
    def handler(request: Request, exc: Exception) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    for exc_type in _ERROR_STATUS:
        app.add_exception_handler(exc_type, handler)

    def unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error")
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": "Internal server error"})

    app.add_exception_handler(Exception, unhandled_handler)


def _register_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s - Status: %s - %.0fms", request.method, request.url.path, response.status_code, elapsed_ms)
        return response


def create_app(ticket_service: TicketService | None = None) -> FastAPI:
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        description="Support ticket intake and triage with LLM priority classification",
        version=settings.app_version,
    )
    app.state.ticket_service = ticket_service or build_ticket_service()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_request_logging(app)
    _register_exception_handlers(app)

    app.include_router(router)
    app.include_router(tickets_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
