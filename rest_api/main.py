"""
REST API main application.
Entry point for the FastAPI REST server.
"""

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from shared.config.settings import settings
from shared.infrastructure.correlation import CorrelationIdMiddleware
from shared.security.rate_limit import limiter
from rest_api.core.cors import configure_cors
from rest_api.core.errors import register_exception_handlers
from rest_api.core.lifespan import lifespan
from rest_api.core.middlewares import ContentTypeValidationMiddleware, SecurityHeadersMiddleware
from rest_api.routers.admin import router as admin_router
from rest_api.routers.auth import router as auth_router
from rest_api.routers.content import router as content_router
from rest_api.routers.public import health_router, scores_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="Sports Bar REST API",
        description="Menu, events, reservations and back-office API for the sports bar website",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiting
    app.state.limiter = limiter
    register_exception_handlers(app)

    # Middleware: last added runs first
    app.add_middleware(ContentTypeValidationMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    configure_cors(app)
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(health_router)
    app.include_router(scores_router)
    app.include_router(auth_router)
    app.include_router(content_router)
    app.include_router(admin_router)

    # Uploaded images, served read-only
    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(
        settings.uploads_url_prefix,
        StaticFiles(directory=str(upload_dir)),
        name="uploads",
    )

    return app


app = create_app()


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rest_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=settings.debug,
    )
