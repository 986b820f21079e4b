# src/mrrender/renderers/heading.py
from __future__ import annotations

from typing import Any

from .base import RenderResult
from .. import config
from ..context import RenderContext
from ..strings import get_string
from ..tag import img, link, render_attrs
from ..widgets import Heading


class HeadingRenderer:
    kind = "heading"

    def can_render(self, obj: Any) -> bool:
        return isinstance(obj, Heading)

    def render(self, obj: Any, *, ctx: RenderContext) -> RenderResult:
        if not obj.text:
            return RenderResult(kind="heading", html="")

        icon = ""
        if obj.icon:
            icon = img(config.pix_url(obj.icon), obj.iconalt, {"class": "icon"})

        help_ = ""
        if obj.helpidentifier:
            alt = get_string("help", identifier=obj.helpidentifier)
            href = obj.helpurl or f"#help-{obj.helpidentifier}"
            help_ = link(
                img(config.pix_url("help"), alt, {"class": "iconhelp"}),
                href,
                {"class": "helplink", "title": alt},
            )

        level = min(6, max(1, int(obj.level)))
        attrs = render_attrs({"class": obj.classes or None, "id": obj.id})
        html = f"<h{level}{attrs}>{icon}{obj.text}{help_}</h{level}>"
        return RenderResult(kind="heading", html=html)
