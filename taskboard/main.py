"""
Taskboard API - Main Application

User registration/login with bearer tokens and per-user task tracking.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.config import settings
from taskboard.database import database
from taskboard.errors import register_error_handlers
from taskboard.auth import auth_router
from taskboard.tasks import tasks_router

import logging

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

ENDPOINTS = [
    "POST   /register",
    "POST   /login",
    "GET    /tasks",
    "POST   /tasks",
    "GET    /tasks/{id}",
    "PATCH  /tasks/{id}/complete",
    "PATCH  /tasks/{id}/in-progress",
    "PATCH  /tasks/{id}/pending",
    "PATCH  /tasks/{id}/status",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    await database.connect()
    yield
    await database.disconnect()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Task management API with per-user task lists",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

register_error_handlers(app)


@app.get("/health", tags=["Health"])
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns the service status and version information.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


@app.get("/", tags=["Root"])
async def root() -> dict:
    """Root endpoint with service information."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs" if settings.DEBUG else "disabled",
        "endpoints": ENDPOINTS,
    }


app.include_router(auth_router)
app.include_router(tasks_router)
