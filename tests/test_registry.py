import pytest

from shortcode_bridge.arguments import ShortcodeArgs
from shortcode_bridge.exceptions import (
    DuplicateShortcodeError,
    RegistrySealedError,
    ShortcodeNotFoundError,
)
from shortcode_bridge.registry import ShortcodeRegistry, ShortcodeRegistryBuilder


def _echo(args: ShortcodeArgs) -> str:
    return f"<p>{args.string('text', 'empty')}</p>"


def test_dispatch_returns_handler_output_unchanged() -> None:
    registry = (
        ShortcodeRegistry.builder()
        .register("echo", _echo)
        .register("raw", lambda args: "  <b>raw</b>\n")
        .build()
    )

    assert registry.dispatch("echo", {"text": "hi"}) == "<p>hi</p>"
    assert registry.dispatch("echo") == "<p>empty</p>"
    assert registry.dispatch("raw", ShortcodeArgs()) == "  <b>raw</b>\n"
    assert registry.names == ("echo", "raw")
    assert "echo" in registry
    assert len(registry) == 2


def test_dispatch_unknown_name_raises_not_found() -> None:
    registry = ShortcodeRegistry.builder().register("echo", _echo).build()

    for name in ("missing", "", "Echo"):
        with pytest.raises(ShortcodeNotFoundError) as exc_info:
            registry.dispatch(name, {})
        assert exc_info.value.name == name
        assert exc_info.value.error_type == "not_found"


def test_duplicate_registration_is_rejected() -> None:
    builder = ShortcodeRegistryBuilder().register("echo", _echo)

    with pytest.raises(DuplicateShortcodeError):
        builder.register("echo", lambda args: "other")

    assert builder.build().dispatch("echo", {"text": "x"}) == "<p>x</p>"


def test_builder_is_sealed_after_build() -> None:
    builder = ShortcodeRegistryBuilder().register("echo", _echo)
    registry = builder.build()

    with pytest.raises(RegistrySealedError):
        builder.register("late", _echo)
    assert "late" not in registry


def test_register_validates_name_and_handler() -> None:
    builder = ShortcodeRegistryBuilder()

    with pytest.raises(ValueError):
        builder.register("  ", _echo)
    with pytest.raises(TypeError):
        builder.register("bad", "not callable")  # type: ignore[arg-type]


def test_handlers_receive_marshalled_args() -> None:
    seen = []

    def capture(args: ShortcodeArgs) -> str:
        seen.append(args)
        return ""

    registry = ShortcodeRegistry.builder().register("capture", capture).build()
    registry.dispatch("capture", {"flag": True})

    assert isinstance(seen[0], ShortcodeArgs)
    assert seen[0].boolean("flag", False) is True
