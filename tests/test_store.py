# tests/test_store.py
from __future__ import annotations

import pytest

from mrrender import store
from mrrender.reports import table_report


@pytest.fixture(autouse=True)
def _reset() -> None:
    store.reset()
    yield
    store.reset()


def test_register_and_get_report() -> None:
    cls = table_report("courses", ["id"])
    entry = store.register_report(cls, lambda: None)

    assert store.get_report("courses") is entry
    assert entry.report_cls is cls
    assert store.list_reports() == ["courses"]


def test_unknown_report_raises_lookup_error() -> None:
    with pytest.raises(LookupError):
        store.get_report("missing")
