"""HTML pages returned from /callback.

Both pages hand the result to the window that opened the OAuth popup using
the Decap CMS message format:

    authorization:github:success:{"token":"...","provider":"..."}
    authorization:github:error:<message>

Values from GitHub are escaped before they are placed in the page: once as
a JavaScript string literal for the postMessage payload and once as HTML
for the visible text.
"""

import html
import json

MESSAGE_PREFIX = "authorization:github"

_JS_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\n": "\\n",
    "\r": "\\r",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}

SUCCESS_PAGE = """<!DOCTYPE html>
<html>
<head><title>OAuth Success</title></head>
<body>
<script>
(function() {{
  var message = '{message}';

  if (window.opener) {{
    window.opener.postMessage(message, '*');
    window.close();
  }} else {{
    document.body.innerHTML = '<p>Authorization successful. You can close this window.</p>';
  }}
}})();
</script>
<p>Authorizing...</p>
</body>
</html>"""

ERROR_PAGE = """<!DOCTYPE html>
<html>
<head><title>OAuth Error</title></head>
<body>
<script>
(function() {{
  var message = '{message}';

  if (window.opener) {{
    window.opener.postMessage(message, '*');
    window.close();
  }}
}})();
</script>
<p>Error: {text}</p>
</body>
</html>"""


def js_string(value: str) -> str:
    """Escape `value` for a single-quoted JavaScript literal inside <script>."""
    return "".join(_JS_ESCAPES.get(char, char) for char in value)


def success_message(token: str, provider: str) -> str:
    payload = json.dumps({"token": token, "provider": provider}, separators=(",", ":"))
    return f"{MESSAGE_PREFIX}:success:{payload}"


def error_message(message: str) -> str:
    return f"{MESSAGE_PREFIX}:error:{message}"


def render_success(token: str, provider: str) -> str:
    return SUCCESS_PAGE.format(message=js_string(success_message(token, provider)))


def render_error(message: str) -> str:
    return ERROR_PAGE.format(
        message=js_string(error_message(message)),
        text=html.escape(message),
    )
