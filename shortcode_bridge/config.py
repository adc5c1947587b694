from __future__ import annotations

from dataclasses import dataclass, field
import os

from dotenv import find_dotenv, load_dotenv


def _load_env() -> None:
    env_path = find_dotenv(usecwd=True)
    if env_path:
        load_dotenv(env_path, override=False)


_load_env()


def _get_env(key: str, default: str | None = None) -> str | None:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value


def _get_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_choice(key: str, default: str, choices: set[str]) -> str:
    value = (_get_env(key) or default).strip().lower()
    if value not in choices:
        return default
    return value


UNKNOWN_POLICIES = {"raise", "message"}


@dataclass
class Settings:
    base_url: str = field(
        default_factory=lambda: (_get_env("SHORTCODE_BASE_URL", "http://127.0.0.1:8080") or "").rstrip("/")
    )
    fetch_timeout_seconds: float = field(
        default_factory=lambda: _get_float("SHORTCODE_FETCH_TIMEOUT_SECONDS", 10.0)
    )
    connect_timeout_seconds: float = field(
        default_factory=lambda: _get_float("SHORTCODE_CONNECT_TIMEOUT_SECONDS", 5.0)
    )
    function_name: str = field(default_factory=lambda: _get_env("SHORTCODE_FUNCTION_NAME", "shortcode") or "shortcode")
    unknown_policy: str = field(
        default_factory=lambda: _get_choice("SHORTCODE_UNKNOWN_POLICY", "raise", UNKNOWN_POLICIES)
    )
    default_method: str = field(
        default_factory=lambda: (_get_env("SHORTCODE_DEFAULT_METHOD", "POST") or "POST").upper()
    )

    def endpoint(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def refresh_settings() -> Settings:
    """Rebuild settings from environment variables."""
    global _settings
    _settings = Settings()
    return _settings


__all__ = [
    "Settings",
    "UNKNOWN_POLICIES",
    "get_settings",
    "refresh_settings",
]
