"""Demo site wiring shortcodes into a FastAPI app."""

from .handlers import build_registry
from .main import create_app

__all__ = ["build_registry", "create_app"]
