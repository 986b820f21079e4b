# src/mrrender/renderers/export.py
from __future__ import annotations

from typing import Any

from .base import RenderResult
from ..context import RenderContext
from ..strings import get_string
from ..tag import empty_tag, escape_html, tag
from ..widgets import Export


class ExportRenderer:
    kind = "export"

    def can_render(self, obj: Any) -> bool:
        return isinstance(obj, Export)

    def render(self, obj: Any, *, ctx: RenderContext) -> RenderResult:
        opts = tag("option", "", {"value": ""}) + "".join(
            tag("option", escape_html(text), {"value": fmt})
            for fmt, text in obj.get_select_options().items()
        )
        carried = "".join(
            empty_tag("input", {"type": "hidden", "name": k, "value": str(v)})
            for k, v in obj.url.params.items()
            if k != Export.REQUEST_EXPORTER
        )
        label = tag("label", escape_html(get_string("export")), {"for": "id_mrexporter"})
        select = tag(
            "select",
            opts,
            {
                "id": "id_mrexporter",
                "name": Export.REQUEST_EXPORTER,
                "onchange": "this.form.submit()",
            },
        )
        form = tag(
            "form",
            carried + label + select,
            {"method": "get", "action": obj.url.path, "class": "singleselect"},
        )
        html = tag("div", form, {"class": "mr_file_export"})
        return RenderResult(kind="export", html=html, meta={"formats": list(obj.formats)})
