import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from wth_backend.config import settings, validate_required_keys
from wth_backend.constants import APP_SETTINGS
from wth_backend.gcal.utils.datetime_utils import utc_now_iso
from wth_backend.routes import auth, calendar, calls, events, health

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Report unset provider keys on startup; each route still checks its own."""
    missing_keys = validate_required_keys()
    if missing_keys:
        logger.warning("Missing environment variables: %s", ", ".join(missing_keys))
    else:
        logger.info("Configuration validation passed")
    yield
    logger.info("Shutting down gracefully...")


def create_app() -> FastAPI:
    app = FastAPI(
        title=APP_SETTINGS.APP_NAME,
        version=APP_SETTINGS.VERSION,
        description=APP_SETTINGS.DESCRIPTION,
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("Incoming request: %s %s", request.method, request.url.path)
        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content={"status": "error", "message": "Route not found", "path": request.url.path},
            )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "message": "Something went wrong!",
                "error": str(exc) if settings.APP_ENV == "development" else "Internal server error",
            },
        )

    @app.get("/")
    def root():
        return {
            "status": "success",
            "message": f"{APP_SETTINGS.APP_NAME} is running!",
            "timestamp": utc_now_iso(),
            "uptime": health.uptime(),
            "environment": settings.APP_ENV,
        }

    @app.get("/api")
    def api_info():
        return {
            "message": f"Welcome to {APP_SETTINGS.APP_NAME} API",
            "version": APP_SETTINGS.VERSION,
            "endpoints": {
                "health": "/health",
                "root": "/",
                "calendar": {"day": "/calendar/day?date=YYYY-MM-DD"},
                "events": {"breakdown": "POST /api/events/breakdown"},
                "calls": {
                    "trigger": "POST /api/calls/trigger",
                    "status": "/api/calls/status/{callId}",
                },
                "oauth": {"callback": "/api/auth/callback/google"},
            },
        }

    app.include_router(health.router, prefix="/health", tags=["Health"])
    app.include_router(calendar.router, prefix="/calendar", tags=["Calendar"])
    app.include_router(events.router, prefix="/api/events", tags=["Events"])
    app.include_router(calls.router, prefix="/api/calls", tags=["Calls"])
    app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])

    return app


app = create_app()


def main():
    import uvicorn

    uvicorn.run(
        "wth_backend.main:app",
        host="0.0.0.0",
        port=settings.APP_PORT,
        reload=settings.APP_ENV == "development",
    )


if __name__ == "__main__":
    main()
