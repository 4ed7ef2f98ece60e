"""Main FastAPI application."""
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from crossword_api.config import CORS_ORIGINS, LOG_LEVEL
from crossword_api.database import init_db
from crossword_api.logging_setup import setup_console_logging
from crossword_api.routes import attempts, puzzle_packs, puzzles, users

setup_console_logging(LOG_LEVEL)
logger = logging.getLogger("crossword_api.http")

app = FastAPI(title="Crossword Puzzle API")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and duration of every request."""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"{request.method} {request.url.path} - {response.status_code} ({duration_ms:.1f}ms)"
    )
    return response


# Startup events
@app.on_event("startup")
def startup_events() -> None:
    """Initialize database on startup."""
    init_db()


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# Include routers
app.include_router(users.router)
app.include_router(puzzles.router)
app.include_router(puzzle_packs.router)
app.include_router(attempts.router)
