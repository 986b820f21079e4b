# src/mrrender/context.py
from __future__ import annotations

from dataclasses import dataclass, field

from .config import ReportSettings, get_report_settings


@dataclass(frozen=True, slots=True)
class AuthorizationContext:
    is_privileged_viewer: bool = False

    @classmethod
    def for_username(
        cls, username: str | None, *, settings: ReportSettings | None = None
    ) -> AuthorizationContext:
        """
        Privileged viewers may see the raw SQL a report executed.
        """
        if not username:
            return cls(is_privileged_viewer=False)
        settings = settings or get_report_settings()
        return cls(is_privileged_viewer=username in settings.report_view_sql)


@dataclass(frozen=True, slots=True)
class RenderContext:
    auth: AuthorizationContext = field(default_factory=AuthorizationContext)
