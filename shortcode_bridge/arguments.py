"""Typed extraction of shortcode call-site arguments.

Values arrive from hand-written template markup, so every extractor is total:
absence or a type mismatch yields the caller's default instead of an error.
"""

from __future__ import annotations

import enum
import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Optional

_QUOTE_CHARS = "\"'"


def trim_quotes(text: str) -> str:
    """Strip single and double quotes from the outer ends of ``text`` only."""
    return text.strip(_QUOTE_CHARS)


class ArgKind(str, enum.Enum):
    STRING = "string"
    BOOL = "bool"
    NUMBER = "number"
    NULL = "null"
    OTHER = "other"


@dataclass(frozen=True)
class ArgValue:
    kind: ArgKind
    raw: Any = None

    @classmethod
    def from_native(cls, value: Any) -> "ArgValue":
        if isinstance(value, ArgValue):
            return value
        if value is None:
            return cls(ArgKind.NULL)
        # bool is checked before int, it is an int subclass
        if isinstance(value, bool):
            return cls(ArgKind.BOOL, value)
        if isinstance(value, (int, float)):
            return cls(ArgKind.NUMBER, value)
        if isinstance(value, str):
            return cls(ArgKind.STRING, value)
        return cls(ArgKind.OTHER, value)


def get(args: Mapping[str, Any], key: str) -> Optional[ArgValue]:
    if key not in args:
        return None
    return ArgValue.from_native(args[key])


def as_string(value: Optional[ArgValue], default: str) -> str:
    if value is None:
        return default
    if value.kind is ArgKind.STRING:
        return trim_quotes(value.raw)
    if value.kind is ArgKind.BOOL:
        return "true" if value.raw else "false"
    if value.kind is ArgKind.NUMBER:
        return json.dumps(value.raw)
    return default


def as_bool(value: Optional[ArgValue], default: bool) -> bool:
    if value is None:
        return default
    if value.kind is ArgKind.BOOL:
        return value.raw
    if value.kind is ArgKind.STRING:
        text = trim_quotes(value.raw)
        if text == "true":
            return True
        if text == "false":
            return False
    return default


def as_int(value: Optional[ArgValue], default: int) -> int:
    if value is None:
        return default
    if value.kind is ArgKind.NUMBER:
        if isinstance(value.raw, float) and not value.raw.is_integer():
            return default
        return int(value.raw)
    if value.kind is ArgKind.STRING:
        text = trim_quotes(value.raw).strip()
        try:
            return int(text)
        except ValueError:
            return default
    return default


class ShortcodeArgs(Mapping[str, ArgValue]):
    """Read-only argument map handed to shortcode handlers."""

    __slots__ = ("_values",)

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        marshalled = {str(key): ArgValue.from_native(value) for key, value in (values or {}).items()}
        self._values = MappingProxyType(marshalled)

    @classmethod
    def coerce(cls, values: Mapping[str, Any] | "ShortcodeArgs" | None) -> "ShortcodeArgs":
        if isinstance(values, ShortcodeArgs):
            return values
        return cls(values)

    def __getitem__(self, key: str) -> ArgValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ShortcodeArgs({self.to_native()!r})"

    def string(self, key: str, default: str) -> str:
        return as_string(get(self, key), default)

    def boolean(self, key: str, default: bool) -> bool:
        return as_bool(get(self, key), default)

    def integer(self, key: str, default: int) -> int:
        return as_int(get(self, key), default)

    def to_native(self) -> dict[str, Any]:
        return {key: value.raw for key, value in self._values.items()}


__all__ = [
    "ArgKind",
    "ArgValue",
    "ShortcodeArgs",
    "as_bool",
    "as_int",
    "as_string",
    "get",
    "trim_quotes",
]
