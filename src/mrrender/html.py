# src/mrrender/html.py
from __future__ import annotations

from .tag import escape_html


def render_page(*, title: str, body: str) -> str:
    """
    Return a complete HTML page around already-rendered widget markup.
    """
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <title>{escape_html(title)}</title>
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <style>
    :root {{
      --bg: #f5f5f5;
      --border: #ddd;
    }}

    body {{
      margin: 0;
      padding: 1rem;
      font-family: system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
      background: var(--bg);
      color: #222;
    }}

    .accesshide {{
      position: absolute;
      left: -10000px;
    }}

    table.generaltable {{
      border-collapse: collapse;
      background: #fff;
      width: 100%;
    }}

    table.generaltable th,
    table.generaltable td {{
      border: 1px solid var(--border);
      padding: 0.3rem 0.5rem;
      text-align: left;
    }}

    .paging, .mr_file_export, .box {{
      margin: 0.5rem 0;
    }}

    .mr_report_sqlbox pre {{
      white-space: pre-wrap;
      background: #fff;
      padding: 0.5rem;
    }}
  </style>
</head>
<body>
{body}
</body>
</html>
"""
