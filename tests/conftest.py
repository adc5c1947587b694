import pytest

from shortcode_bridge.config import refresh_settings


@pytest.fixture()
def test_settings(monkeypatch):
    monkeypatch.setenv("SHORTCODE_BASE_URL", "http://shortcodes.test")
    monkeypatch.setenv("SHORTCODE_FETCH_TIMEOUT_SECONDS", "2")
    monkeypatch.setenv("SHORTCODE_CONNECT_TIMEOUT_SECONDS", "1")
    monkeypatch.delenv("SHORTCODE_FUNCTION_NAME", raising=False)
    monkeypatch.delenv("SHORTCODE_UNKNOWN_POLICY", raising=False)
    monkeypatch.delenv("SHORTCODE_DEFAULT_METHOD", raising=False)
    return refresh_settings()
