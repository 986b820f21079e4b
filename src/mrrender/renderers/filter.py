# src/mrrender/renderers/filter.py
from __future__ import annotations

from typing import Any

from .base import RenderResult
from ..context import RenderContext
from ..filters import FilterForm
from ..tag import empty_tag, tag


class FilterRenderer:
    kind = "filter"

    def can_render(self, obj: Any) -> bool:
        return isinstance(obj, FilterForm)

    def render(self, obj: Any, *, ctx: RenderContext) -> RenderResult:
        # Only show the form if one of the filters is not hidden
        if not obj.has_visible():
            return RenderResult(kind="filter", html="")

        obj.init()
        owned = obj.owned_names()

        # Keep page state (report, sort, perpage...) across submissions,
        # but restart paging since the result set changes.
        carried = [
            empty_tag("input", {"type": "hidden", "name": k, "value": str(v)})
            for k, v in obj.url.params.items()
            if k not in owned and k != "page"
        ]
        elements = [f.add_element() for f in obj.filters]
        submit = empty_tag(
            "input",
            {"type": "submit", "value": obj.submit_label()},
        )
        html = tag(
            "form",
            "".join(carried + elements) + tag("div", submit, {"class": "fitem fsubmit"}),
            {"method": "get", "action": obj.url.path, "class": "mform mr_html_filter"},
        )
        return RenderResult(kind="filter", html=html, meta={"filters": len(obj.filters)})
