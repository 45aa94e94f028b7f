"""
FastAPI dependencies.

Hand the per-process registry, upload store and settings to request handlers.
"""

from fastapi import Request

from shared.config import Settings
from shared.storage import UploadStorage
from modules.mint_registry import MintRegistry


def get_registry(request: Request) -> MintRegistry:
    """Mint registry created by the application factory."""
    return request.app.state.registry


def get_storage(request: Request) -> UploadStorage:
    """Uploads store created by the application factory."""
    return request.app.state.storage


def get_settings(request: Request) -> Settings:
    """Settings the application was built with."""
    return request.app.state.settings
