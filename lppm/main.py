# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Main FastAPI application entry point.

This module creates and configures the FastAPI application.

Assumptions:
- FastAPI instance should include OpenAPI documentation
- The WordPress database already exists; no schema is created at startup
- Every request gets a request_id bound to the log context
"""
from uuid import uuid4

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lppm.api.auth import router as auth_router
from lppm.api.content_api import router as content_router
from lppm.api.documents_api import documents_router, pos_ap_router
from lppm.api.envelope import ApiError, api_error_handler
from lppm.api.posts import router as posts_router
from lppm.config import settings
from lppm.database.schema import Post
from lppm.database.session import get_db
from lppm.logging_config import bind_context, clear_context
from lppm.logging_utils import log_application_error, log_application_event

SERVICE_NAME = "lppm-api"
VERSION = "0.1.0"


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="LPPM Unila API",
        description="JSON API for LPPM news, documents and site content",
        version=VERSION,
        docs_url=f"/api/{settings.api_version}/docs",
        redoc_url=f"/api/{settings.api_version}/redoc",
        openapi_url=f"/api/{settings.api_version}/openapi.json",
    )

    app.add_exception_handler(ApiError, api_error_handler)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        bind_context(request_id=str(uuid4()), path=request.url.path)
        try:
            response = await call_next(request)
            log_application_event(
                "api_request",
                method=request.method,
                status_code=response.status_code,
            )
            return response
        finally:
            clear_context()

    @app.get("/api/health")
    async def health_check():
        """API health check endpoint.

        Returns:
            dict: Service status information
        """
        return {
            "service": SERVICE_NAME,
            "version": VERSION,
            "status": "running"
        }

    @app.get("/api/health/database")
    def database_check(db: Session = Depends(get_db)):
        """Check the WordPress connection by reading one news title."""
        try:
            post = (
                db.query(Post.post_title)
                .filter(Post.post_type == "post")
                .first()
            )
        except SQLAlchemyError as e:
            log_application_error("database_check_failed", e)
            return JSONResponse(
                status_code=503,
                content={"status": "error", "message": str(e)},
            )
        return {
            "status": "connected",
            "sample_title": post.post_title if post else None,
        }

    app.include_router(auth_router)
    app.include_router(content_router)
    app.include_router(posts_router)
    app.include_router(documents_router)
    app.include_router(pos_ap_router)

    return app


app = create_app()


def cli() -> None:
    """Run the API with uvicorn (console script "lppm-server")."""
    uvicorn.run(
        "lppm.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
