from typing import Optional

import uvicorn
from fastapi import FastAPI, status
from fastapi.responses import JSONResponse

from shortener_app.config import settings
from shortener_app.logging_config import setup_logging
from shortener_app.api import pages, redirect
from shortener_app.storage.exceptions import StorageError
from shortener_app.storage.factory import StorageFactory, StorageBackend
from shortener_app.storage.strategies import RedirectStorageStrategy

logger = setup_logging(settings.log_level)


def create_app(storage: Optional[RedirectStorageStrategy] = None) -> FastAPI:
    """
    Build the application around one shared storage instance.

    Args:
        storage: Storage to serve from (built from settings when omitted)
    """
    if storage is None:
        storage = StorageFactory.create(StorageBackend(settings.storage_backend))

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="A minimal redirect shortener built with FastAPI",
        debug=settings.debug
    )
    app.state.storage = storage

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        try:
            redirects = len(app.state.storage)
        except StorageError:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unhealthy", "environment": settings.environment},
            )
        return {
            "status": "healthy",
            "environment": settings.environment,
            "redirects": redirects,
        }

    ######## Include routers
    app.include_router(pages.router)
    app.include_router(redirect.router)

    return app


app = create_app()


if __name__ == "__main__":
    logger.info("Server starting on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
