from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..bridge import ContentFetchBridge
from ..config import Settings, get_settings
from ..templating import install_shortcodes
from .api import router
from .handlers import build_registry

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def create_environment(bridge: ContentFetchBridge, settings: Optional[Settings] = None) -> Environment:
    settings = settings or get_settings()
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
    )
    install_shortcodes(env, build_registry(bridge, settings))
    return env


def create_app(
    *,
    settings: Optional[Settings] = None,
    bridge: Optional[ContentFetchBridge] = None,
) -> FastAPI:
    settings = settings or get_settings()
    bridge = bridge or ContentFetchBridge(settings=settings)

    @asynccontextmanager
    async def _lifespan(_: FastAPI):
        try:
            yield
        finally:
            bridge.close()

    app = FastAPI(title="Shortcode Bridge Demo", lifespan=_lifespan)
    app.state.bridge = bridge
    app.state.templates = create_environment(bridge, settings)
    app.include_router(router)

    @app.get("/", response_class=PlainTextResponse)
    def index() -> PlainTextResponse:
        return PlainTextResponse("Hello world!")

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok", "base_url": settings.base_url}

    logger.debug("Shortcode demo app created for %s", settings.base_url)
    return app


app = create_app()

__all__ = ["TEMPLATES_DIR", "app", "create_app", "create_environment"]
