# src/mrrender/strings.py
from __future__ import annotations

from typing import Any

# English strings used by the renderers; hosts can override via set_string().
_STRINGS: dict[str, str] = {
    "asc": "Ascending",
    "desc": "Descending",
    "sortby": "Sort by",
    "all": "All",
    "export": "Export",
    "exportas": "Export as {format}",
    "previous": "Previous",
    "next": "Next",
    "page": "Page",
    "perpage": "Per page",
    "filter": "Filter",
    "help": "Help with {identifier}",
    "nothingtodisplay": "Nothing to display",
    "reportsql": "Report SQL",
    "csv": "CSV",
    "json": "JSON",
}


def get_string(key: str, **fmt: Any) -> str:
    """
    Look up a display string. Unknown keys come back as ``[[key]]`` so they
    are visible in the page rather than silently blank.
    """
    s = _STRINGS.get(key)
    if s is None:
        return f"[[{key}]]"
    if fmt:
        return s.format(**fmt)
    return s


def set_string(key: str, value: str) -> None:
    _STRINGS[key] = value
