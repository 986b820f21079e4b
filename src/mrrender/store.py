# src/mrrender/store.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable
import threading

from .reports import Report

ConnectionFactory = Callable[[], Any]


@dataclass(frozen=True, slots=True)
class ReportEntry:
    name: str
    report_cls: type[Report]
    connect: ConnectionFactory


_LOCK = threading.Lock()
_REPORTS: dict[str, ReportEntry] = {}


def register_report(report_cls: type[Report], connect: ConnectionFactory) -> ReportEntry:
    """
    Make a report class servable. ``connect`` is called once per request and
    must return a DB-API connection pandas can read from.
    """
    entry = ReportEntry(name=report_cls.name, report_cls=report_cls, connect=connect)
    with _LOCK:
        _REPORTS[entry.name] = entry
    return entry


def get_report(name: str) -> ReportEntry:
    with _LOCK:
        try:
            return _REPORTS[name]
        except KeyError:
            raise LookupError(f"No report named {name!r}.") from None


def list_reports() -> list[str]:
    with _LOCK:
        return sorted(_REPORTS)


def reset() -> None:
    with _LOCK:
        _REPORTS.clear()
