# tests/test_app_routes.py
from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from mrrender import store
from mrrender.app import app
from mrrender.renderers import register_default_renderers
from mrrender.reports import Report
from mrrender.widgets import Column


class ScoresReport(Report):
    name = "scores"
    perpage = 2

    def columns(self) -> list[Column]:
        return [Column("student", "Student"), Column("score", "Score")]

    def sql(self) -> tuple[str, list[Any] | None]:
        return "SELECT student, score FROM scores", None


@pytest.fixture
def db(tmp_path: Path) -> Path:
    path = tmp_path / "scores.sqlite"
    with sqlite3.connect(path) as c:
        c.execute("CREATE TABLE scores (student TEXT, score INTEGER)")
        c.executemany(
            "INSERT INTO scores VALUES (?, ?)",
            [("ann", 90), ("bob", 75), ("cat", 82)],
        )
    return path


@pytest.fixture(autouse=True)
def reset_state(db: Path) -> None:
    store.reset()
    register_default_renderers()
    store.register_report(ScoresReport, lambda: sqlite3.connect(db))
    yield
    store.reset()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_list_reports(client: TestClient) -> None:
    resp = client.get("/reports")
    assert resp.status_code == 200
    assert resp.json() == {"reports": ["scores"]}


def test_unknown_report_is_404(client: TestClient) -> None:
    resp = client.get("/reports/nope")
    assert resp.status_code == 404


def test_report_page_renders_sorted_table(client: TestClient) -> None:
    resp = client.get("/reports/scores?tsort=score&torder=desc")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")

    body = resp.text
    assert "<!DOCTYPE html>" in body
    assert '<h2 class="main">scores</h2>' in body
    assert body.index(">ann<") < body.index(">cat<")
    assert ">bob<" not in body  # second page
    assert "tsort=score&amp;torder=asc" in body
    assert 'class="box generalbox boxwidthwide boxaligncenter mr_report_sqlbox"' not in body
    assert "SELECT student, score FROM scores" not in body


def test_support_user_sees_sql(client: TestClient) -> None:
    resp = client.get("/reports/scores", headers={"X-Remote-User": "mrsupport"})
    assert resp.status_code == 200
    assert 'class="box generalbox boxwidthwide boxaligncenter mr_report_sqlbox"' in resp.text
    assert "SELECT student, score FROM scores" in resp.text


def test_export_csv_download(client: TestClient) -> None:
    resp = client.get("/reports/scores?mrexporter=csv")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "attachment" in resp.headers.get("content-disposition", "").lower()
    assert resp.text.strip().splitlines() == [
        "Student,Score",
        "ann,90",
        "bob,75",
        "cat,82",
    ]


def test_bad_export_format_is_400(client: TestClient) -> None:
    resp = client.get("/reports/scores?mrexporter=xml")
    assert resp.status_code == 400
