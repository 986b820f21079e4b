# src/mrrender/config.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import configparser
import os

DEFAULT_REPORT_VIEW_SQL: tuple[str, ...] = ("mrsupport", "mrdev")
DEFAULT_PIX_BASE_URL = "/pix"
DEFAULT_PERPAGE = 25
PERPAGE_ALL = 10000

SORT_ENABLED_DEFAULT: bool = True
PIX_BASE_URL: str = DEFAULT_PIX_BASE_URL


@dataclass(frozen=True, slots=True)
class ReportSettings:
    # Usernames allowed to see the executed report SQL
    report_view_sql: tuple[str, ...]

    pix_base_url: str
    default_perpage: int


def get_sort_enabled_default() -> bool:
    return SORT_ENABLED_DEFAULT


def set_sort_enabled_default(enabled: bool) -> None:
    """Whether newly built tables allow column sorting unless told otherwise."""
    global SORT_ENABLED_DEFAULT
    SORT_ENABLED_DEFAULT = bool(enabled)


def get_pix_base_url() -> str:
    return PIX_BASE_URL


def set_pix_base_url(url: str) -> None:
    """
    Set where theme icons (sort arrows, help) are served from.

    Accepts an absolute URL or a server path, e.g. "/pix" or "https://cdn/x/pix".
    """
    global PIX_BASE_URL
    url = (url or "").strip()
    if not url:
        raise ValueError("pix_base_url must be a non-empty URL or path")
    PIX_BASE_URL = url.rstrip("/")


def pix_url(name: str) -> str:
    """URL of a theme icon such as 't/down'."""
    return f"{PIX_BASE_URL}/{name}.svg"


def _strip_quotes(s: str) -> str:
    s = s.strip()
    if len(s) >= 2 and ((s[0] == s[-1] == "'") or (s[0] == s[-1] == '"')):
        return s[1:-1].strip()
    return s


def _parse_listish(raw: str) -> list[str]:
    """
    Split a comma and/or newline separated ini value into clean items.
    """
    out: list[str] = []
    for line in raw.splitlines():
        for part in line.split(","):
            item = _strip_quotes(part)
            if item:
                out.append(item)
    return out


def _resolve_ini_path() -> Path | None:
    """
    Resolution order:
      1) env var MRRENDER_INI
      2) ./mrrender.ini (cwd)
      3) None
    """
    env_path = os.environ.get("MRRENDER_INI")
    if env_path:
        p = Path(env_path).expanduser()
        if p.exists() and p.is_file():
            return p

    cwd_ini = Path.cwd() / "mrrender.ini"
    if cwd_ini.exists() and cwd_ini.is_file():
        return cwd_ini

    return None


def load_report_settings() -> ReportSettings:
    """
    Load optional mrrender.ini and return ReportSettings.

    Usernames listed under report_view_sql are added to the built-in
    support accounts, never replacing them.
    """
    usernames = list(DEFAULT_REPORT_VIEW_SQL)
    pix_base = DEFAULT_PIX_BASE_URL
    perpage = DEFAULT_PERPAGE

    ini_path = _resolve_ini_path()
    if ini_path is None:
        return ReportSettings(
            report_view_sql=tuple(usernames),
            pix_base_url=pix_base,
            default_perpage=perpage,
        )

    cfg = configparser.ConfigParser()
    cfg.read(ini_path)

    section = "report-settings"
    if not cfg.has_section(section):
        return ReportSettings(
            report_view_sql=tuple(usernames),
            pix_base_url=pix_base,
            default_perpage=perpage,
        )

    for name in _parse_listish(cfg.get(section, "report_view_sql", fallback="")):
        if name not in usernames:
            usernames.append(name)

    pix_base = (
        _strip_quotes(cfg.get(section, "pix_base_url", fallback=pix_base)).rstrip("/")
        or pix_base
    )

    raw_perpage = _strip_quotes(cfg.get(section, "default_perpage", fallback=""))
    if raw_perpage:
        try:
            perpage = int(raw_perpage)
        except ValueError:
            raise ValueError(
                f"default_perpage must be an integer, got {raw_perpage!r}"
            ) from None
        if perpage < 1:
            raise ValueError("default_perpage must be >= 1")

    return ReportSettings(
        report_view_sql=tuple(usernames),
        pix_base_url=pix_base,
        default_perpage=perpage,
    )


_REPORT_SETTINGS: ReportSettings | None = None


def get_report_settings() -> ReportSettings:
    global _REPORT_SETTINGS
    if _REPORT_SETTINGS is None:
        _REPORT_SETTINGS = load_report_settings()
    return _REPORT_SETTINGS
