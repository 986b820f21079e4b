# src/mrrender/renderers/paging.py
from __future__ import annotations

from typing import Any

from .base import RenderResult
from .. import config
from ..context import RenderContext
from ..strings import get_string
from ..tag import empty_tag, escape_html, link, tag
from ..widgets import Paging


class PagingRenderer:
    kind = "paging"

    def can_render(self, obj: Any) -> bool:
        return isinstance(obj, Paging)

    def render(self, obj: Any, *, ctx: RenderContext) -> RenderResult:
        output = ""
        if obj.perpage:
            output = _paging_bar(obj)

        if obj.perpage_opts:
            select = _perpage_select(obj)
            # Place it within the paging bar's div when there is one
            if output.endswith("</div>"):
                output = output[: -len("</div>")] + f"{select}</div>"
            else:
                output += tag("div", select, {"class": "box paging"})

        return RenderResult(
            kind="paging",
            html=output,
            meta={"pages": obj.page_count(), "page": obj.page},
        )


def _paging_bar(paging: Paging) -> str:
    pages = paging.page_count()
    if paging.total <= paging.perpage:
        return ""

    current = min(max(0, paging.page), pages - 1)
    items: list[str] = [escape_html(get_string("page")) + ":"]
    if current > 0:
        items.append(
            link(
                escape_html(get_string("previous")),
                paging.url.out(**{Paging.REQUEST_PAGE: current - 1}),
                {"class": "previous"},
            )
        )
    for page in range(pages):
        if page == current:
            items.append(tag("span", str(page + 1), {"class": "current-page"}))
        else:
            items.append(link(str(page + 1), paging.url.out(**{Paging.REQUEST_PAGE: page})))
    if current < pages - 1:
        items.append(
            link(
                escape_html(get_string("next")),
                paging.url.out(**{Paging.REQUEST_PAGE: current + 1}),
                {"class": "next"},
            )
        )
    return tag("div", "&nbsp;".join(items), {"class": "paging"})


def _perpage_select(paging: Paging) -> str:
    options: dict[int, str] = {}
    for opt in paging.perpage_opts:
        if opt == "all":
            options[config.PERPAGE_ALL] = get_string("all")
        else:
            options[int(opt)] = str(opt)

    opts = "".join(
        tag(
            "option",
            escape_html(text),
            {"value": str(value), "selected": value == paging.perpage},
        )
        for value, text in options.items()
    )
    carried = "".join(
        empty_tag("input", {"type": "hidden", "name": k, "value": str(v)})
        for k, v in paging.url.params.items()
        if k not in (Paging.REQUEST_PAGE, Paging.REQUEST_PERPAGE)
    )
    select = tag(
        "select",
        opts,
        {
            "name": Paging.REQUEST_PERPAGE,
            "aria-label": get_string("perpage"),
            "onchange": "this.form.submit()",
        },
    )
    return tag(
        "form",
        carried + select,
        {"method": "get", "action": paging.url.path, "class": "singleselect"},
    )
