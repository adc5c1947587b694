from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable, Optional

from .arguments import ShortcodeArgs
from .exceptions import DuplicateShortcodeError, RegistrySealedError, ShortcodeNotFoundError

logger = logging.getLogger(__name__)

Handler = Callable[[ShortcodeArgs], str]


class ShortcodeRegistryBuilder:
    """Collects handlers until :meth:`build` seals it.

    Registering a name twice is rejected with ``DuplicateShortcodeError``.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}
        self._sealed = False

    def register(self, name: str, handler: Handler) -> "ShortcodeRegistryBuilder":
        if self._sealed:
            raise RegistrySealedError()
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Shortcode name must be a non-empty string")
        if not callable(handler):
            raise TypeError(f"Handler for shortcode {name!r} is not callable")
        if name in self._handlers:
            raise DuplicateShortcodeError(name)
        self._handlers[name] = handler
        return self

    def build(self) -> "ShortcodeRegistry":
        self._sealed = True
        return ShortcodeRegistry(self._handlers)


class ShortcodeRegistry:
    """Immutable name to handler table; safe to share between render threads."""

    def __init__(self, handlers: Optional[Mapping[str, Handler]] = None) -> None:
        self._handlers: Mapping[str, Handler] = MappingProxyType(dict(handlers or {}))

    @staticmethod
    def builder() -> ShortcodeRegistryBuilder:
        return ShortcodeRegistryBuilder()

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def get(self, name: str) -> Optional[Handler]:
        return self._handlers.get(name)

    def dispatch(self, name: str, args: ShortcodeArgs | Mapping[str, Any] | None = None) -> str:
        handler = self._handlers.get(name)
        if handler is None:
            raise ShortcodeNotFoundError(name)
        logger.debug("Dispatching shortcode %s", name)
        return handler(ShortcodeArgs.coerce(args))


__all__ = ["Handler", "ShortcodeRegistry", "ShortcodeRegistryBuilder"]
