# main.py

"""
Application entry point for the IEP Harmony File Processing Server.

This module initializes the FastAPI application, registers all routers,
the error handlers and the middleware, and provides a root endpoint. It
can be run directly with Uvicorn for local development or deployed via
ASGI servers in production.
"""

import logging
import time

# Config imports
from config import AVAILABLE_ENDPOINTS, SERVICE_NAME, settings

# FASTAPI imports
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# APP imports
from app.exceptions import ServiceError
from app.routers.analyze import router as analyze_router
from app.routers.health import router as health_router
from app.routers.upload import router as upload_router
from app.utils.clock import elapsed_ms, utc_timestamp
from app.utils.logging_config import configure_logging

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="IEP Harmony",
    description=(
        "File processing server that extracts plain text from uploaded"
        " DOCX and PDF documents for accommodation and lesson plan review."
    ),
    version="1.0"
)
app.state.started_at = time.monotonic()

# CORS Middleware configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def stamp_request_time(request: Request, call_next):
    """Record when the request arrived and report the elapsed time."""
    request.state.started_at = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Process-Time"] = str(elapsed_ms(request.state.started_at))
    return response


# Router Registration
app.include_router(health_router)
app.include_router(upload_router)
app.include_router(analyze_router)


# =====================================================
# Error Handlers
# =====================================================
@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(level, "%s %s failed: %s", request.method, request.url.path, exc.to_payload())
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "Endpoint not found",
                "availableEndpoints": AVAILABLE_ENDPOINTS,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        # Undecodable body, reported like any other server error.
        logger.error("Server error: malformed JSON on %s: %s", request.url.path, errors)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "timestamp": utc_timestamp()},
        )
    logger.warning("Invalid request body for %s: %s", request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request body.",
            "details": [error.get("msg") for error in errors],
        },
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Server error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "timestamp": utc_timestamp()},
    )


@app.get("/")
def home() -> dict[str, str]:
    """
    Root Endpoint for the API.

    Returns:
        dict[str, str]: A simple JSON message identifying the service.
    """
    return {"message": SERVICE_NAME}


def run() -> None:
    import uvicorn

    logger.info("%s running on port %d", SERVICE_NAME, settings.PORT)
    logger.info("Health check: http://localhost:%d/health", settings.PORT)
    uvicorn.run(app, host=settings.APP_HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
