import shutil
import subprocess
from pathlib import Path

import pytest

from shortcode_bridge.bridge import (
    BODY_PLACEHOLDER,
    POST_SCRIPT_TEMPLATE,
    URL_PLACEHOLDER,
    FetchRequest,
    FetchStrategy,
    render_client_script,
)
from shortcode_bridge.exceptions import InvalidFetchRequestError


def _deferred(url: str, method: str = "POST", body: str | None = None) -> FetchRequest:
    return FetchRequest(url=url, method=method, body=body, strategy=FetchStrategy.DEFERRED)


def test_post_template_carries_both_placeholders() -> None:
    assert URL_PLACEHOLDER in POST_SCRIPT_TEMPLATE
    assert BODY_PLACEHOLDER in POST_SCRIPT_TEMPLATE


def test_post_script_embeds_url_and_body() -> None:
    script = render_client_script(_deferred("http://localhost:8080/data", body='{"foo": "bar", "bar": "bing"}'))

    assert URL_PLACEHOLDER not in script
    assert BODY_PLACEHOLDER not in script
    assert 'new Request("http://localhost:8080/data"' in script
    assert 'JSON.stringify({"foo":"bar","bar":"bing"})' in script
    assert "headers.append('Content-Type', 'application/json')" in script
    assert "method: 'POST'" in script


def test_script_is_a_self_contained_iife() -> None:
    script = render_client_script(_deferred("http://localhost:8080/data"))

    assert script.startswith("<script>\n(function () {")
    assert script.endswith("})();\n</script>")
    assert script.count("<script>") == 1
    assert script.count("</script>") == 1


def test_script_reactivates_embedded_scripts_and_removes_itself() -> None:
    script = render_client_script(_deferred("http://localhost:8080/data"))

    assert "function reactivateScripts(node)" in script
    assert "child.nodeName === 'SCRIPT'" in script
    assert "document.createElement('script')" in script
    assert "script.textContent = child.textContent" in script
    assert "child.replaceWith(script)" in script
    assert "currentScript.after(...container.childNodes)" in script
    assert "currentScript.remove()" in script


def test_failed_fetch_logs_and_yields_empty_content() -> None:
    script = render_client_script(_deferred("http://localhost:8080/data"))

    assert "if (!response.ok)" in script
    assert "console.error('Fetch failed:', error);" in script
    assert "return '';" in script


def test_body_cannot_close_the_script_element() -> None:
    script = render_client_script(_deferred("http://localhost:8080/data", body='{"html": "</script><b>x</b>"}'))

    assert script.count("</script>") == 1
    assert "<\\/script>" in script


def test_url_is_escaped_inside_the_string_literal() -> None:
    script = render_client_script(_deferred('http://localhost:8080/data?q="x"'))

    assert 'new Request("http://localhost:8080/data?q=\\"x\\""' in script


def test_get_script_has_noscript_fallback() -> None:
    script = render_client_script(_deferred("http://localhost:8080/products?limit=4&orderby=price", method="get"))

    assert 'await fetch("http://localhost:8080/products?limit=4&orderby=price")' in script
    assert BODY_PLACEHOLDER not in script
    assert script.endswith(
        '<noscript><a href="http://localhost:8080/products?limit=4&amp;orderby=price">'
        "Link for Robots (No JavaScript)</a></noscript>"
    )


@pytest.mark.parametrize(
    "kwargs",
    [
        {"url": "http://localhost/data", "method": "DELETE"},
        {"url": "/data"},
        {"url": "ftp://localhost/data"},
        {"url": "http://localhost/data", "method": "GET", "body": "{}"},
        {"url": "http://localhost/data", "body": "{not json"},
    ],
)
def test_invalid_requests_are_rejected(kwargs) -> None:
    with pytest.raises(InvalidFetchRequestError):
        FetchRequest(**kwargs)


def test_request_defaults() -> None:
    request = FetchRequest(url="http://localhost/data", method="post")

    assert request.method == "POST"
    assert request.body == "{}"
    assert request.strategy is FetchStrategy.BLOCKING
    assert request.with_strategy(FetchStrategy.DEFERRED).strategy is FetchStrategy.DEFERRED


def _script_source(script: str) -> str:
    start = script.index("<script>") + len("<script>")
    end = script.index("</script>")
    return script[start:end]


@pytest.mark.skipif(shutil.which("node") is None, reason="node is not installed")
@pytest.mark.parametrize("method", ["POST", "GET"])
def test_emitted_script_compiles(tmp_path: Path, method: str) -> None:
    body = '{"html": "</script>", "quote": "\\"x\\""}' if method == "POST" else None
    script = render_client_script(_deferred('http://localhost:8080/data?q="x"', method=method, body=body))
    source = tmp_path / "shortcode.js"
    source.write_text(_script_source(script), encoding="utf-8")

    result = subprocess.run(["node", "--check", str(source)], capture_output=True, text=True)

    assert result.returncode == 0, result.stderr
