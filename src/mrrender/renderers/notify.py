# src/mrrender/renderers/notify.py
from __future__ import annotations

from typing import Any

from .base import RenderResult
from ..context import RenderContext
from ..tag import tag
from ..widgets import Notify


class NotifyRenderer:
    kind = "notify"

    def can_render(self, obj: Any) -> bool:
        return isinstance(obj, Notify)

    def render(self, obj: Any, *, ctx: RenderContext) -> RenderResult:
        # Messages are markup supplied by the page, not user input.
        html = "".join(
            tag("div", message, {"class": f"notify{level}", "role": "alert"})
            for message, level in obj.messages
        )
        return RenderResult(kind="notify", html=html, meta={"count": len(obj.messages)})
