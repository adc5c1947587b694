"""Delivery of remote shortcode content, blocking or deferred to the client."""

from .client_script import (
    BODY_PLACEHOLDER,
    GET_SCRIPT_TEMPLATE,
    POST_SCRIPT_TEMPLATE,
    URL_PLACEHOLDER,
)
from .fetch import (
    BlockingFetcher,
    ContentFetchBridge,
    FetchRequest,
    FetchStrategy,
    render_client_script,
)

__all__ = [
    "BODY_PLACEHOLDER",
    "BlockingFetcher",
    "ContentFetchBridge",
    "FetchRequest",
    "FetchStrategy",
    "GET_SCRIPT_TEMPLATE",
    "POST_SCRIPT_TEMPLATE",
    "URL_PLACEHOLDER",
    "render_client_script",
]
