"""
Focus Timer – Backend API
Start with: uvicorn main:app --reload
"""
import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import Session
from starlette.exceptions import HTTPException

import store
from config import settings
from db import engine, init_db
from errors import AppError
from routers import active_timer_session, stats, timer_settings, users, work_sessions

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    if settings.stale_session_hours > 0:
        with Session(engine) as db:
            store.reconcile_stale(db, timedelta(hours=settings.stale_session_hours))
    yield


app = FastAPI(
    title="Focus Timer API",
    description="Work-session timer with timezone-aware statistics",
    version="0.1.0",
    lifespan=lifespan,
)

# Allow frontend to call this API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users.router)
app.include_router(active_timer_session.router)
app.include_router(work_sessions.router)
app.include_router(stats.router)
app.include_router(timer_settings.router)


def _error(status_code: int, message: str, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "code": code})


@app.exception_handler(AppError)
async def app_error_handler(request, exc: AppError):
    return _error(exc.status_code, exc.message, exc.code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{field}: {first.get('msg')}" if field else "Invalid request"
    return _error(400, message, "validation_error")


@app.exception_handler(HTTPException)
async def http_error_handler(request, exc: HTTPException):
    return _error(exc.status_code, str(exc.detail), "http_error")


@app.exception_handler(Exception)
async def unhandled_error_handler(request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, "Internal server error", "internal_error")


@app.get("/health")
def health():
    """Check that the API is running. Frontend can call this first."""
    return {"status": "ok", "message": "Focus Timer API is running"}


@app.get("/")
def root():
    """Root welcome."""
    return {"app": "Focus Timer", "docs": "/docs"}
