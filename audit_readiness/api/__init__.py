"""
FastAPI application factory and API package.

Run with:
    uvicorn audit_readiness.api:app --reload --port 8000

Or via main.py:
    python -m audit_readiness serve
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from audit_readiness.config import get_settings
from audit_readiness.api.routes import health_router, readiness_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Application factory — create and configure the FastAPI instance."""
    settings = get_settings()

    application = FastAPI(
        title="COR Audit Readiness API",
        description="Evidence-based COR audit readiness scoring",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS: allow the dashboard origins
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(health_router, tags=["Health"])
    application.include_router(readiness_router, prefix="/api/readiness", tags=["Readiness"])

    logger.info(f"Created {settings.app_name} API (mock_mode={settings.mock_mode})")
    return application


# Module-level instance for `uvicorn audit_readiness.api:app`
app = create_app()
