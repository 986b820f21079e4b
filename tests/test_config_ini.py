# tests/test_config_ini.py
from __future__ import annotations

from pathlib import Path

import pytest

import mrrender.config as cfg
from mrrender.context import AuthorizationContext


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path: Path) -> None:
    cfg._REPORT_SETTINGS = None  # type: ignore[attr-defined]
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MRRENDER_INI", raising=False)
    yield
    cfg._REPORT_SETTINGS = None  # type: ignore[attr-defined]
    cfg.set_pix_base_url(cfg.DEFAULT_PIX_BASE_URL)
    cfg.set_sort_enabled_default(True)


def test_strip_quotes() -> None:
    assert cfg._strip_quotes("'abc'") == "abc"
    assert cfg._strip_quotes('"abc"') == "abc"
    assert cfg._strip_quotes(" abc ") == "abc"


def test_parse_listish_commas_and_multiline() -> None:
    assert cfg._parse_listish("a, b, c") == ["a", "b", "c"]
    assert cfg._parse_listish("a\nb\nc\n") == ["a", "b", "c"]
    assert cfg._parse_listish("") == []


def test_defaults_when_no_ini() -> None:
    s = cfg.load_report_settings()
    assert s.report_view_sql == cfg.DEFAULT_REPORT_VIEW_SQL
    assert s.pix_base_url == cfg.DEFAULT_PIX_BASE_URL
    assert s.default_perpage == cfg.DEFAULT_PERPAGE


def test_ini_in_cwd_adds_sql_viewers(tmp_path: Path) -> None:
    (tmp_path / "mrrender.ini").write_text(
        "\n".join(
            [
                "[report-settings]",
                'report_view_sql = "alice", bob',
                "  mrdev",
                "pix_base_url = https://cdn.example/pix/",
                "default_perpage = 50",
            ]
        ),
        encoding="utf-8",
    )
    s = cfg.load_report_settings()

    assert s.report_view_sql == ("mrsupport", "mrdev", "alice", "bob")
    assert s.pix_base_url == "https://cdn.example/pix"
    assert s.default_perpage == 50


def test_env_var_path_wins(monkeypatch, tmp_path: Path) -> None:
    ini = tmp_path / "other.ini"
    ini.write_text("[report-settings]\ndefault_perpage = 7\n", encoding="utf-8")
    monkeypatch.setenv("MRRENDER_INI", str(ini))

    assert cfg.load_report_settings().default_perpage == 7


def test_ini_without_section_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / "mrrender.ini").write_text("[other]\nx = 1\n", encoding="utf-8")
    assert cfg.load_report_settings().default_perpage == cfg.DEFAULT_PERPAGE


@pytest.mark.parametrize("raw", ["lots", "0"])
def test_bad_perpage_raises(tmp_path: Path, raw: str) -> None:
    (tmp_path / "mrrender.ini").write_text(
        f"[report-settings]\ndefault_perpage = {raw}\n", encoding="utf-8"
    )
    with pytest.raises(ValueError):
        cfg.load_report_settings()


def test_get_report_settings_is_cached() -> None:
    assert cfg.get_report_settings() is cfg.get_report_settings()


def test_pix_base_url_setter() -> None:
    cfg.set_pix_base_url("/theme/pix/")
    assert cfg.pix_url("t/up") == "/theme/pix/t/up.svg"
    with pytest.raises(ValueError):
        cfg.set_pix_base_url("  ")


def test_sort_enabled_default_applies_to_new_tables() -> None:
    from mrrender.widgets import Table

    cfg.set_sort_enabled_default(False)
    assert Table(columns=[]).sort_enabled is False


def test_authorization_from_username() -> None:
    s = cfg.ReportSettings(report_view_sql=("mrsupport", "alice"), pix_base_url="/pix", default_perpage=10)

    assert AuthorizationContext.for_username("alice", settings=s).is_privileged_viewer is True
    assert AuthorizationContext.for_username("bob", settings=s).is_privileged_viewer is False
    assert AuthorizationContext.for_username(None).is_privileged_viewer is False
