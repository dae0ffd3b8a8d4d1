"""
Leaguedesk API
FastAPI backend for amateur league standings, fixtures and results
"""

import logging
import sys
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from leaguedesk.database import get_db, init_db
from leaguedesk.errors import LeagueDeskError
from leaguedesk.routers import (
    auth_router,
    leagues_router,
    teams_router,
    matches_router,
    users_router,
)
from leaguedesk.config import get_settings

settings = get_settings()

# Configure logging
log_level = logging.DEBUG if settings.environment == "development" else logging.INFO
logging.basicConfig(
    level=log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting Leaguedesk API...")
    init_db()

    yield

    logger.info("Shutting down Leaguedesk API...")


app = FastAPI(
    title="Leaguedesk API",
    description="League tables, fixtures and results for amateur competitions",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LeagueDeskError)
async def league_desk_error_handler(request: Request, exc: LeagueDeskError):
    if exc.status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Include routers
app.include_router(auth_router)
app.include_router(leagues_router)
app.include_router(teams_router)
app.include_router(matches_router)
app.include_router(users_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Leaguedesk API",
        "version": "1.0.0",
        "docs": "/docs",
        "status": "healthy",
    }


@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """Health check endpoint. Reports the store as well as the process."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning(f"Health check could not reach the database: {exc}")
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "healthy"}
