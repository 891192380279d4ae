from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from emoclass.core.config import settings
from emoclass.core.errors import EmoClassError
from emoclass.core.logging import configure_logging
from emoclass.api.routes import health, checkins, alerts, classes, dashboard
import logging
from contextlib import asynccontextmanager

@asynccontextmanager
async def lifespan(app: FastAPI):
    # migrations own the schema outside dev
    if settings.APP_ENV == "dev":
        from emoclass.db.init_db import init_db
        init_db()
    yield

def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    logger = logging.getLogger(__name__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"], allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(EmoClassError)
    async def domain_error_handler(request: Request, exc: EmoClassError):
        if exc.status_code >= 500:
            logger.error("%s on %s: %s (cause: %r)", exc.error_code, request.url.path, exc, exc.__cause__)
        else:
            logger.info("%s on %s: %s", exc.error_code, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": exc.message, "error_code": exc.error_code},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected malformed request on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": "Invalid request payload", "error_code": "INVALID_INPUT"},
        )

    @app.exception_handler(OperationalError)
    async def operational_error_handler(request: Request, exc: OperationalError):
        logger.error(f"Database operational error: {exc}")
        return JSONResponse(
            status_code=503,
            content={
                "success": False,
                "message": "Unable to connect to the database. Please try again later.",
                "error_code": "DATABASE_CONNECTION_ERROR"
            }
        )

    # routes
    app.include_router(health.router)
    app.include_router(checkins.router)
    app.include_router(alerts.router)
    app.include_router(classes.router)
    app.include_router(dashboard.router)
    return app

app = create_app()
