# tests/test_filters.py
from __future__ import annotations

from mrrender.filters import (
    AutocompleteIdFilter,
    FilterForm,
    HiddenFilter,
    SelectFilter,
    TextFilter,
)
from mrrender.urls import PageUrl

USERS = {3: "Ann Smith", 7: "Bob Jones"}


def test_autocomplete_defaults_cover_both_fields() -> None:
    f = AutocompleteIdFilter("userid", "User", USERS)
    assert f.preferences_defaults() == {"userid": 0, "userid_autocompletetext": ""}


def test_autocomplete_inactive_without_id_or_matching_text() -> None:
    f = AutocompleteIdFilter("userid", "User", USERS)
    f.preferences_init({"userid_autocompletetext": "nobody"})
    assert f.sql() is None


def test_autocomplete_restricts_to_posted_id() -> None:
    f = AutocompleteIdFilter("userid", "User", USERS, field="u.id")
    f.preferences_init({"userid": "3"})
    assert f.sql() == ("u.id = ?", [3])


def test_autocomplete_non_numeric_id_is_kept_as_text() -> None:
    f = AutocompleteIdFilter("code", "Code", {"ab": "Alpha Beta"})
    f.preferences_init({"code": "ab"})
    assert f.sql() == ("code = ?", ["ab"])


def test_autocomplete_resolves_exact_text_match() -> None:
    f = AutocompleteIdFilter("userid", "User", USERS)
    f.preferences_init({"userid_autocompletetext": "Bob Jones"})
    assert f.resolve() == 7
    assert f.sql() == ("userid = ?", [7])


def test_autocomplete_element_shows_option_text_for_known_id() -> None:
    f = AutocompleteIdFilter("userid", "User", USERS)
    f.preferences_init({"userid": "3", "userid_autocompletetext": "typed"})
    html = f.add_element()

    assert 'name="userid_autocompletetext" value="Ann Smith"' in html
    assert '<input type="hidden" name="userid" value="3" />' in html
    assert '<datalist id="id_userid_options">' in html
    assert '<option value="Bob Jones" data-id="7" />' in html


def test_autocomplete_element_keeps_typed_text_when_unresolved() -> None:
    f = AutocompleteIdFilter("userid", "User", USERS, advanced=True)
    f.preferences_init({"userid_autocompletetext": "An"})
    html = f.add_element()

    assert html.startswith('<div class="fitem advanced">')
    assert 'value="An"' in html
    assert '<input type="hidden" name="userid" value="" />' in html


def test_text_filter_is_case_insensitive_like() -> None:
    f = TextFilter("name", "Name").preferences_init({"name": " Ann "})
    assert f.sql() == ("LOWER(name) LIKE ?", ["%ann%"])
    assert TextFilter("name", "Name").sql() is None


def test_select_filter_only_accepts_known_options() -> None:
    f = SelectFilter("dept", "Dept", {"eng": "Engineering"})
    assert f.preferences_init({"dept": "eng"}).sql() == ("dept = ?", ["eng"])
    assert f.preferences_init({"dept": "sales"}).sql() is None
    assert '<option value="eng" selected>Engineering</option>' in (
        f.preferences_init({"dept": "eng"}).add_element()
    )


def test_hidden_filter_uses_fixed_value() -> None:
    f = HiddenFilter("course", 4, field="c.id")
    assert f.sql() == ("c.id = ?", [4])


def test_filter_form_collects_active_clauses() -> None:
    form = FilterForm(
        url=PageUrl("/r"),
        filters=[TextFilter("name", "Name"), HiddenFilter("course", 4)],
        preferences={"name": "x"},
    )
    assert form.sql() == [("LOWER(name) LIKE ?", ["%x%"]), ("course = ?", [4])]
    assert form.owned_names() == {"name", "course"}
    assert form.has_visible() is True
