from __future__ import annotations

from uuid import uuid4


def new_trace_id() -> str:
    return uuid4().hex


class ShortcodeError(Exception):
    def __init__(self, message: str, *, error_type: str, trace_id: str | None = None) -> None:
        self.error_type = error_type
        self.trace_id = trace_id or new_trace_id()
        super().__init__(message)

    def with_trace(self) -> str:
        return f"{self.args[0]} (trace_id={self.trace_id})"


class ShortcodeNotFoundError(ShortcodeError, LookupError):
    def __init__(self, name: str, *, trace_id: str | None = None) -> None:
        self.name = name
        super().__init__(f"Unknown shortcode display name: {name}", error_type="not_found", trace_id=trace_id)


class MissingDisplayError(ShortcodeError):
    def __init__(self, message: str = "Missing display attribute", *, trace_id: str | None = None) -> None:
        super().__init__(message, error_type="missing_display", trace_id=trace_id)


class DuplicateShortcodeError(ShortcodeError):
    def __init__(self, name: str, *, trace_id: str | None = None) -> None:
        self.name = name
        super().__init__(f"Shortcode already registered: {name}", error_type="duplicate", trace_id=trace_id)


class RegistrySealedError(ShortcodeError):
    def __init__(self, message: str = "Registry builder already built", *, trace_id: str | None = None) -> None:
        super().__init__(message, error_type="sealed", trace_id=trace_id)


class InvalidFetchRequestError(ShortcodeError, ValueError):
    def __init__(self, message: str, *, trace_id: str | None = None) -> None:
        super().__init__(message, error_type="invalid_request", trace_id=trace_id)


class ShortcodeFetchError(ShortcodeError):
    def __init__(
        self,
        message: str,
        *,
        url: str,
        status_code: int | None = None,
        body: str | None = None,
        trace_id: str | None = None,
    ) -> None:
        self.url = url
        self.status_code = status_code
        self.body = body
        error_type = "http_status" if status_code is not None else "transport"
        super().__init__(message, error_type=error_type, trace_id=trace_id)

    def summary(self) -> str:
        parts = [str(self)]
        if self.body:
            parts.append(self._truncate(self.body))
        return "\n".join(parts)

    @staticmethod
    def _truncate(value: str, limit: int = 2000) -> str:
        if len(value) <= limit:
            return value
        return value[:limit].rstrip() + "..."


__all__ = [
    "new_trace_id",
    "ShortcodeError",
    "ShortcodeNotFoundError",
    "MissingDisplayError",
    "DuplicateShortcodeError",
    "RegistrySealedError",
    "InvalidFetchRequestError",
    "ShortcodeFetchError",
]
