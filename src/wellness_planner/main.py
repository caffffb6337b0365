"""Main FastAPI application for the Wellness Planner."""

import time

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import __version__
from .api import areas, goals, reflections
from .api.middleware import (
    ProblemDetailsMiddleware,
    RequestSizeLimitMiddleware,
    install_error_handlers,
)
from .config import config_manager, get_config
from .db.database import get_db
from .utils.logging_config import get_logger, initialize_logging

logger = get_logger("main")
config = get_config()

# Create FastAPI app
app = FastAPI(
    title=config.app.app_name,
    description=config.app.description,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

install_error_handlers(app)

# Add custom middleware in correct order (innermost first)
app.add_middleware(ProblemDetailsMiddleware)
app.add_middleware(RequestSizeLimitMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.app.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
)

# Register API routers
app.include_router(areas.router)
app.include_router(goals.router)
app.include_router(reflections.router)


@app.on_event("startup")
async def startup_event():
    """Initialize logging and report configuration problems."""
    initialize_logging()
    for issue in config_manager.validate_config():
        logger.warning(f"Configuration issue: {issue}")
    logger.info(f"{config.app.app_name} {__version__} started")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "wellness-planner", "version": __version__}


@app.get("/ready")
def readiness_check(db: Session = Depends(get_db)):
    """Readiness check endpoint that validates database connectivity and configuration."""
    start_time = time.time()
    checks = {"database": False, "config": False}
    errors = []

    try:
        db.execute(text("SELECT 1"))
        checks["database"] = True
    except SQLAlchemyError as e:
        logger.error(f"Readiness database check failed: {e}")
        errors.append("Database check failed")

    issues = config_manager.validate_config()
    checks["config"] = not issues
    errors.extend(issues)

    response = {
        "status": "ready" if all(checks.values()) else "not_ready",
        "service": "wellness-planner",
        "version": __version__,
        "checks": checks,
        "response_time_ms": round((time.time() - start_time) * 1000, 2),
    }

    if errors:
        response["errors"] = errors

    status_code = 200 if all(checks.values()) else 503
    return JSONResponse(content=response, status_code=status_code)
