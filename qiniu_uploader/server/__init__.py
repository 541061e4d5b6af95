"""
HTTP companion server.

Exposes the upload pipeline over a small JSON API:

    POST /api/upload          multipart field ``file``
    GET  /api/images?prefix=  list uploaded images
"""
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..core.config import UploaderConfig
from ..core.upload import UploadCoordinator
from .routes import router


def create_app(
    config: UploaderConfig,
    coordinator: Optional[UploadCoordinator] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Loaded configuration
        coordinator: Upload coordinator (default: built from config)

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(title="qiniu-uploader")
    app.state.coordinator = coordinator or UploadCoordinator.from_config(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        max_age=600,
    )
    app.include_router(router)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


__all__ = ['create_app']
