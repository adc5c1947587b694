from __future__ import annotations

import html
from typing import Optional

import httpx

from ..arguments import ShortcodeArgs
from ..bridge import ContentFetchBridge, FetchStrategy
from ..config import Settings, get_settings
from ..registry import ShortcodeRegistry
from .schemas import DataPayload


def build_registry(bridge: ContentFetchBridge, settings: Optional[Settings] = None) -> ShortcodeRegistry:
    settings = settings or get_settings()

    # {{ shortcode(display="my_shortcode", foo="bar", bar="bing", jscaller="true") | safe }}
    def my_shortcode(args: ShortcodeArgs) -> str:
        payload = DataPayload(
            foo=args.string("foo", "no foo"),
            bar=args.string("bar", "no bar"),
        )
        return bridge.fetch_shortcode(
            settings.endpoint("data"),
            method="POST",
            body=payload.model_dump_json(),
            strategy=FetchStrategy.from_flag(args.boolean("jscaller", False)),
        )

    def another_shortcode(args: ShortcodeArgs) -> str:
        width = html.escape(args.string("width", "200"), quote=True)
        height = html.escape(args.string("height", "200"), quote=True)
        image_src = html.escape(args.string("image_src", "No image attribute specified"), quote=True)
        return f'<img src="{image_src}" width="{width}" height="{height}">'

    # {{ shortcode(display="products", limit=4, orderby="price") | safe }}
    # the product grid is not needed server-side, so it defaults to the deferred strategy
    def products(args: ShortcodeArgs) -> str:
        params: dict[str, str] = {}
        if "limit" in args:
            params["limit"] = args.string("limit", "4")
        if "orderby" in args:
            params["orderby"] = args.string("orderby", "id")
        url = str(httpx.URL(settings.endpoint("products"), params=params))
        return bridge.fetch_shortcode(
            url,
            method="GET",
            strategy=FetchStrategy.from_flag(args.boolean("jscaller", True)),
        )

    return (
        ShortcodeRegistry.builder()
        .register("my_shortcode", my_shortcode)
        .register("another_shortcode", another_shortcode)
        .register("products", products)
        .build()
    )


__all__ = ["build_registry"]
