"""Pluggable shortcodes for Jinja2 templates with blocking or deferred content fetch."""

from .arguments import ArgKind, ArgValue, ShortcodeArgs, as_bool, as_int, as_string, get, trim_quotes
from .bridge import (
    BlockingFetcher,
    ContentFetchBridge,
    FetchRequest,
    FetchStrategy,
    render_client_script,
)
from .config import Settings, get_settings, refresh_settings
from .exceptions import (
    DuplicateShortcodeError,
    InvalidFetchRequestError,
    MissingDisplayError,
    RegistrySealedError,
    ShortcodeError,
    ShortcodeFetchError,
    ShortcodeNotFoundError,
)
from .registry import Handler, ShortcodeRegistry, ShortcodeRegistryBuilder
from .templating import ShortcodeFunction, install_shortcodes

__all__ = [
    "ArgKind",
    "ArgValue",
    "BlockingFetcher",
    "ContentFetchBridge",
    "DuplicateShortcodeError",
    "FetchRequest",
    "FetchStrategy",
    "Handler",
    "InvalidFetchRequestError",
    "MissingDisplayError",
    "RegistrySealedError",
    "Settings",
    "ShortcodeArgs",
    "ShortcodeError",
    "ShortcodeFetchError",
    "ShortcodeFunction",
    "ShortcodeNotFoundError",
    "ShortcodeRegistry",
    "ShortcodeRegistryBuilder",
    "as_bool",
    "as_int",
    "as_string",
    "get",
    "get_settings",
    "install_shortcodes",
    "refresh_settings",
    "render_client_script",
    "trim_quotes",
]
