# src/mrrender/urls.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode


@dataclass(frozen=True, slots=True)
class PageUrl:
    """
    A page path plus its query parameters.

    Renderers never mutate a PageUrl; they ask for a new URL string with
    some parameters overridden (sort column, page number, export format).
    """

    path: str
    params: dict[str, Any] = field(default_factory=dict)

    def merged(self, **overrides: Any) -> dict[str, Any]:
        out = dict(self.params)
        for k, v in overrides.items():
            if v is None:
                out.pop(k, None)
            else:
                out[k] = v
        return out

    def out(self, **overrides: Any) -> str:
        params = self.merged(**overrides)
        if not params:
            return self.path
        query = urlencode({k: _param_text(v) for k, v in params.items()})
        sep = "&" if "?" in self.path else "?"
        return f"{self.path}{sep}{query}"

    def with_params(self, **overrides: Any) -> PageUrl:
        return PageUrl(self.path, self.merged(**overrides))


def _param_text(v: Any) -> str:
    if isinstance(v, bool):
        return "1" if v else "0"
    return str(v)
