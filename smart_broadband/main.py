import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from smart_broadband.api import api_router
from smart_broadband.api.routers.clients import FAILURE_MESSAGES, error_response
from smart_broadband.core.config import Settings
from smart_broadband.core.cors import OriginGateMiddleware
from smart_broadband.db.init_db import init_db
from smart_broadband.db.session import Database

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


async def _http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Bodies the schema cannot parse are reported like the storage rejecting them.
    route_name = getattr(request.scope.get("route"), "name", None)
    message = FAILURE_MESSAGES.get(route_name, "Invalid request")
    logger.warning("Rejected request body on %s %s: %s", request.method, request.url.path, exc.errors())
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


def create_app(settings: Settings, database: Database | None = None) -> FastAPI:
    database = database or Database.from_settings(settings)
    origins = settings.cors_origins

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Server running on port %s", settings.uvicorn_port)
        logger.info("Allowed origins: %s", ", ".join(origins))
        logger.info("Database: %s", database.backend_name)
        await init_db(app.state.database)

        yield

        await app.state.database.dispose()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    # Added last so it wraps CORSMiddleware and runs first.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(OriginGateMiddleware, allowed_origins=origins)

    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(api_router, prefix=settings.api_prefix)
    return app
