"""Client-side completion scripts for deferred shortcodes.

Each template is an immediately-invoked function expression, so several
instances on one page never share variables. The script fetches the
shortcode content, re-creates any ``<script>`` elements found in it (markup
assigned through ``innerHTML`` never executes its scripts) and inserts the
result right after itself before removing itself from the document.
"""

from __future__ import annotations

import html
import json

URL_PLACEHOLDER = "{-- replaced with url --}"
BODY_PLACEHOLDER = "{-- replaced with object --}"

_SPLICE_JS = """
    function reactivateScripts(node) {
        for (const child of Array.from(node.childNodes)) {
            if (child.hasChildNodes()) {
                reactivateScripts(child);
            }
            if (child.nodeName === 'SCRIPT') {
                const script = document.createElement('script');
                for (const attr of Array.from(child.attributes)) {
                    script.setAttribute(attr.name, attr.value);
                }
                script.textContent = child.textContent;
                child.replaceWith(script);
            }
        }
    }
    function splice(currentScript, content) {
        try {
            const container = document.createElement('div');
            container.innerHTML = content;
            reactivateScripts(container);
            currentScript.after(...container.childNodes);
        } catch (error) {
            console.error('Shortcode splice failed:', error);
        } finally {
            currentScript.remove();
        }
    }
    (async () => {
        const currentScript = document.currentScript;
        const content = await fetchShortcodeData();
        splice(currentScript, content);
    })();
"""

_FETCH_JS = """
    async function fetchShortcodeData() {
        try {
            %(request)s
            if (!response.ok) {
                throw new Error(`HTTP error! Status: ${response.status}`);
            }
            return await response.text();
        } catch (error) {
            console.error('Fetch failed:', error);
            return '';
        }
    }
"""

_POST_REQUEST_JS = """const request = new Request("%s", {
                headers: (() => {
                    const headers = new Headers();
                    headers.append('Content-Type', 'application/json');
                    return headers;
                })(),
                method: 'POST',
                body: JSON.stringify(%s),
            });
            const response = await fetch(request);""" % (URL_PLACEHOLDER, BODY_PLACEHOLDER)

_GET_REQUEST_JS = 'const response = await fetch("%s");' % URL_PLACEHOLDER


def _wrap(request_js: str) -> str:
    return "<script>\n(function () {" + (_FETCH_JS % {"request": request_js}) + _SPLICE_JS + "})();\n</script>"


POST_SCRIPT_TEMPLATE = _wrap(_POST_REQUEST_JS)
GET_SCRIPT_TEMPLATE = _wrap(_GET_REQUEST_JS)

_NOSCRIPT_TEMPLATE = '<noscript><a href="{href}">Link for Robots (No JavaScript)</a></noscript>'


def _script_safe(text: str) -> str:
    # keep the payload from terminating the surrounding <script> element
    return text.replace("</", "<\\/").replace("<!--", "<\\!--")


def js_string_content(value: str) -> str:
    """Escape ``value`` for use between double quotes in a JS string literal."""
    return _script_safe(json.dumps(value)[1:-1])


def js_object_literal(body: str) -> str:
    """Re-serialise a JSON document as a compact, script-safe JS literal."""
    document = json.loads(body)
    return _script_safe(json.dumps(document, separators=(",", ":")))


def instantiate_post_script(url: str, body: str) -> str:
    return POST_SCRIPT_TEMPLATE.replace(URL_PLACEHOLDER, js_string_content(url)).replace(
        BODY_PLACEHOLDER, js_object_literal(body)
    )


def instantiate_get_script(url: str) -> str:
    script = GET_SCRIPT_TEMPLATE.replace(URL_PLACEHOLDER, js_string_content(url))
    return script + _NOSCRIPT_TEMPLATE.format(href=html.escape(url, quote=True))


__all__ = [
    "BODY_PLACEHOLDER",
    "GET_SCRIPT_TEMPLATE",
    "POST_SCRIPT_TEMPLATE",
    "URL_PLACEHOLDER",
    "instantiate_get_script",
    "instantiate_post_script",
    "js_object_literal",
    "js_string_content",
]
