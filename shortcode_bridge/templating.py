"""Jinja2 binding for the shortcode registry.

Templates call ``{{ shortcode(display="products", limit=4) | safe }}``. The
returned markup is not escaped here; marking it safe is the template's job.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from jinja2 import Environment

from .arguments import ShortcodeArgs
from .config import UNKNOWN_POLICIES, get_settings
from .exceptions import MissingDisplayError, ShortcodeNotFoundError
from .registry import ShortcodeRegistry

logger = logging.getLogger(__name__)

DISPLAY_KEY = "display"


class ShortcodeFunction:
    """Template-callable entry point into :class:`ShortcodeRegistry`.

    ``on_unknown`` fixes what an unregistered or missing ``display`` name does:
    ``"raise"`` lets the error abort the render, ``"message"`` renders a short
    diagnostic string in place of the shortcode.
    """

    def __init__(self, registry: ShortcodeRegistry, *, on_unknown: str = "raise") -> None:
        if on_unknown not in UNKNOWN_POLICIES:
            raise ValueError(f"Unsupported unknown-shortcode policy: {on_unknown}")
        self.registry = registry
        self.on_unknown = on_unknown

    def __call__(self, **kwargs: Any) -> str:
        args = ShortcodeArgs(kwargs)
        name = args.string(DISPLAY_KEY, "")
        try:
            if not name:
                raise MissingDisplayError()
            if name not in self.registry:
                raise ShortcodeNotFoundError(name)
        except (MissingDisplayError, ShortcodeNotFoundError) as exc:
            if self.on_unknown == "raise":
                raise
            logger.warning("Rendering placeholder for shortcode: %s", exc)
            return str(exc)
        # errors raised by the handler itself always propagate
        return self.registry.dispatch(name, args)


def install_shortcodes(
    env: Environment,
    registry: ShortcodeRegistry,
    *,
    name: Optional[str] = None,
    on_unknown: Optional[str] = None,
) -> Environment:
    settings = get_settings()
    function = ShortcodeFunction(registry, on_unknown=on_unknown or settings.unknown_policy)
    env.globals[name or settings.function_name] = function
    return env


__all__ = ["DISPLAY_KEY", "ShortcodeFunction", "install_shortcodes"]
