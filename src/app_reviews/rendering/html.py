"""HTML pages: post-submission confirmation and the embedded admin home.

Both pages are small enough to build inline. Every interpolated value is
escaped; values placed inside <script> go through JSON with `<`, `>` and
`&` unicode-escaped so they cannot close the tag.
"""

import json
from html import escape

from ..schemas.outcome import RenderDirective

APP_BRIDGE_SRC = "https://unpkg.com/@shopify/app-bridge@3"


def script_literal(value: object) -> str:
    return (
        json.dumps(value)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


def render_confirmation(directive: RenderDirective) -> str:
    heading = "Thanks for your review!" if directive.ok else "We couldn't save your review"
    title = "Thanks!" if directive.ok else heading
    id_line = f"<p>Review ID: {escape(directive.id)}</p>\n" if directive.id else ""
    message_line = f"<p><small>{escape(directive.message)}</small></p>\n" if directive.message else ""
    return f"""<!doctype html>
<meta charset="utf-8">
<title>{title}</title>
<style>body{{font:16px/1.4 system-ui, sans-serif; padding:24px}}</style>
<h1>{heading}</h1>
{id_line}{message_line}<p><a href="{escape(directive.return_to)}">Continue</a></p>
<script>location.replace({script_literal(directive.return_to)});</script>"""


def render_admin_home(shop: str, host: str, api_key: str) -> str:
    bridge = ""
    if api_key and host:
        bridge = f"""
    <script>
      try {{
        const AppBridge = window["app-bridge"];
        if (AppBridge) {{
          AppBridge.createApp({{ apiKey: {script_literal(api_key)}, host: {script_literal(host)} }});
        }}
      }} catch (e) {{}}
    </script>"""

    return f"""<!doctype html>
<html>
  <head>
    <meta charset="utf-8"/>
    <meta name="viewport" content="width=device-width,initial-scale=1"/>
    <title>App Reviews</title>
    <script src="{APP_BRIDGE_SRC}"></script>
    <style>
      body {{ font: 14px/1.5 system-ui, sans-serif; padding: 24px; }}
      .card {{ max-width: 720px; padding: 16px; border: 1px solid #e5e7eb; border-radius: 8px; }}
    </style>
  </head>
  <body>
    <div class="card">
      <h1>App Reviews</h1>
      <p>Admin home is loaded.</p>
      <p><small>shop: {escape(shop or "(unknown)")} | host: {escape(host or "(missing)")}</small></p>
      <p>Use your product page on the storefront to submit reviews via the App Proxy form.</p>
      <ul>
        <li>Health: <code>/reviews/ping</code></li>
        <li>Proxy submit: <code>/reviews/submit</code></li>
      </ul>
    </div>{bridge}
  </body>
</html>"""
