# backend/app/main.py
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import uvicorn
import logging

from seating_engine.core.exceptions import SeatingEngineError

from .api.v1.api import api_router
from .config import get_settings, validate_settings
from .core.exceptions import AppError
from .logging_config import LOGGING_CONFIG
from .services.seating import SeatingService

# Get a logger for this specific module
logger = logging.getLogger(__name__)

# Load application settings from the configuration file/environment
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown."""
    logger.info("Starting up the application...")
    for issue in validate_settings(settings):
        logger.warning(f"Configuration issue: {issue}")

    app.state.seating_service = SeatingService(settings)
    state = app.state.seating_service.state
    logger.info(f"Classroom initialized with a {state.rows}x{state.columns} grid")

    yield

    logger.info("Shutting down the application...")


app = FastAPI(
    title="Classroom Seating Planner API",
    description="Seat students in a classroom grid while keeping chosen groups apart",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    logger.warning(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(SeatingEngineError)
async def engine_error_handler(request: Request, exc: SeatingEngineError):
    logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch any unhandled exceptions and log them with a full traceback.
    Returns a generic 500 error to the client to avoid leaking details.
    """
    logger.error(
        f"Unhandled exception for request {request.method} {request.url}: {exc}",
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "An internal server error occurred."},
    )


# Include API routes from the v1 api module
app.include_router(api_router, prefix="/api/v1")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint providing basic API information."""
    return {
        "message": "Welcome to the Classroom Seating Planner API",
        "version": settings.APP_VERSION,
        "status": "active",
    }


@app.get("/health")
async def health_check(request: Request):
    """Health check endpoint reporting whether the classroom service is up."""
    service = getattr(request.app.state, "seating_service", None)
    return {
        "status": "healthy" if service is not None else "starting",
        "service": "backend",
        "classroom": service.state.summary() if service is not None else None,
    }


if __name__ == "__main__":
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_config=LOGGING_CONFIG,
    )
