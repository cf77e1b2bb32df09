# backend/unravel/main.py
from __future__ import annotations

"""
FastAPI application setup.

This module depends on:
- unravel.config.get_settings for configuration
- unravel.api.api_router for route registration
- unravel.services.statsig_client for flushing events on shutdown
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from unravel.api import api_router
from unravel.config import get_settings
from unravel.services.statsig_client import shutdown_statsig

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
)


# ---- CORS ----

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(o).rstrip("/") for o in settings.allowed_origins],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- Routes ----

app.include_router(api_router, prefix="/api")


# ---- Lifecycle ----


@app.on_event("shutdown")
def on_shutdown() -> None:
    shutdown_statsig()


# ---- Healthcheck ----


@app.get("/health", tags=["health"])
def health() -> dict:
    return {"status": "ok"}
