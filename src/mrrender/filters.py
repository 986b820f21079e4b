# src/mrrender/filters.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .strings import get_string
from .tag import escape_html, empty_tag, tag
from .urls import PageUrl

# (clause, params) with qmark placeholders, e.g. ("u.id = ?", [3])
SqlClause = tuple[str, list[Any]]


class Filter:
    """
    A single report filter.

    Values come from the request (``Preferences``) with the filter's own
    defaults underneath. ``add_element`` returns the form markup and
    ``sql`` the restriction to apply, or None when the filter is inactive.
    """

    def __init__(
        self, name: str, label: str, advanced: bool = False, field: str | None = None
    ) -> None:
        self.name = name
        self.label = label
        self.advanced = advanced
        self.field = field or name
        self._preferences: Mapping[str, Any] = {}

    def preferences_defaults(self) -> dict[str, Any]:
        return {self.name: ""}

    def preferences_init(self, preferences: Mapping[str, Any]) -> Filter:
        self._preferences = preferences
        return self

    def preferences_get(self, name: str) -> Any:
        if name in self._preferences:
            return self._preferences[name]
        return self.preferences_defaults().get(name, "")

    def add_element(self) -> str:
        raise NotImplementedError

    def sql(self) -> SqlClause | None:
        raise NotImplementedError

    def _wrap(self, label_for: str, control: str) -> str:
        classes = "fitem advanced" if self.advanced else "fitem"
        label = tag("label", escape_html(self.label), {"for": label_for})
        return tag("div", label + control, {"class": classes})


class TextFilter(Filter):
    """Case-insensitive substring match."""

    def add_element(self) -> str:
        control = empty_tag(
            "input",
            {
                "type": "text",
                "id": f"id_{self.name}",
                "name": self.name,
                "value": str(self.preferences_get(self.name)),
            },
        )
        return self._wrap(f"id_{self.name}", control)

    def sql(self) -> SqlClause | None:
        value = str(self.preferences_get(self.name)).strip()
        if not value:
            return None
        return f"LOWER({self.field}) LIKE ?", [f"%{value.lower()}%"]


class SelectFilter(Filter):
    def __init__(
        self,
        name: str,
        label: str,
        options: Mapping[Any, str],
        advanced: bool = False,
        field: str | None = None,
        choose: str = "",
    ) -> None:
        super().__init__(name, label, advanced, field)
        self.options = dict(options)
        self.choose = choose

    def add_element(self) -> str:
        current = str(self.preferences_get(self.name))
        opts = [tag("option", escape_html(self.choose), {"value": ""})]
        for key, text in self.options.items():
            opts.append(
                tag(
                    "option",
                    escape_html(text),
                    {"value": str(key), "selected": str(key) == current},
                )
            )
        control = tag("select", "".join(opts), {"id": f"id_{self.name}", "name": self.name})
        return self._wrap(f"id_{self.name}", control)

    def sql(self) -> SqlClause | None:
        value = self.preferences_get(self.name)
        if value in ("", None):
            return None
        for key in self.options:
            if str(key) == str(value):
                return f"{self.field} = ?", [key]
        # Ignore values that are not one of the options
        return None


class HiddenFilter(Filter):
    """
    A fixed restriction carried in the form as a hidden field.

    Forms made only of hidden filters are not displayed at all.
    """

    def __init__(self, name: str, value: Any, field: str | None = None) -> None:
        super().__init__(name, "", False, field)
        self.value = value

    def preferences_defaults(self) -> dict[str, Any]:
        return {self.name: self.value}

    def add_element(self) -> str:
        return empty_tag(
            "input",
            {"type": "hidden", "name": self.name, "value": str(self.preferences_get(self.name))},
        )

    def sql(self) -> SqlClause | None:
        value = self.preferences_get(self.name)
        if value in ("", None):
            return None
        return f"{self.field} = ?", [value]


class AutocompleteIdFilter(Filter):
    """
    Free-text input that resolves to a record ID.

    Options map record IDs to display text. The typed text lives in
    ``<name>_autocompletetext``; the chosen ID in a hidden ``<name>`` field.
    """

    def __init__(
        self,
        name: str,
        label: str,
        options: Mapping[Any, str],
        advanced: bool = False,
        field: str | None = None,
    ) -> None:
        super().__init__(name, label, advanced, field)
        self.options = dict(options)

    @property
    def textfieldname(self) -> str:
        return f"{self.name}_autocompletetext"

    def preferences_defaults(self) -> dict[str, Any]:
        return {self.name: 0, self.textfieldname: ""}

    def _option_text(self, key: Any) -> str | None:
        for option_key, text in self.options.items():
            if str(option_key) == str(key):
                return text
        return None

    def resolve(self) -> Any:
        """
        The selected ID. If no ID was posted but the typed text matches an
        option exactly, that option's ID is used.
        """
        key = self.preferences_get(self.name)
        if key not in ("", None, 0, "0"):
            return key
        text = str(self.preferences_get(self.textfieldname)).strip()
        if text:
            for option_key, option_text in self.options.items():
                if option_text == text:
                    return option_key
        return None

    def add_element(self) -> str:
        key = self.resolve()
        text = self.preferences_get(self.textfieldname)
        if key is not None:
            known = self._option_text(key)
            if known is not None:
                text = known

        listid = f"id_{self.name}_options"
        textinput = empty_tag(
            "input",
            {
                "type": "text",
                "id": f"id_{self.textfieldname}",
                "name": self.textfieldname,
                "value": str(text),
                "list": listid,
                "autocomplete": "off",
                "data-idfield": self.name,
            },
        )
        hidden = empty_tag(
            "input",
            {"type": "hidden", "name": self.name, "value": "" if key is None else str(key)},
        )
        datalist = tag(
            "datalist",
            "".join(
                empty_tag("option", {"value": label, "data-id": str(k)})
                for k, label in self.options.items()
            ),
            {"id": listid},
        )
        return self._wrap(f"id_{self.textfieldname}", textinput + hidden + datalist)

    def sql(self) -> SqlClause | None:
        key = self.resolve()
        if key is None:
            return None
        if isinstance(key, str) and key.lstrip("-").isdigit():
            key = int(key)
        return f"{self.field} = ?", [key]


@dataclass(slots=True)
class FilterForm:
    url: PageUrl
    filters: list[Filter] = field(default_factory=list)
    preferences: Mapping[str, Any] = field(default_factory=dict)

    def add(self, f: Filter) -> FilterForm:
        self.filters.append(f)
        return self

    def init(self) -> FilterForm:
        for f in self.filters:
            f.preferences_init(self.preferences)
        return self

    def owned_names(self) -> set[str]:
        names: set[str] = set()
        for f in self.filters:
            names.update(f.preferences_defaults())
        return names

    def has_visible(self) -> bool:
        return any(not isinstance(f, HiddenFilter) for f in self.filters)

    def sql(self) -> list[SqlClause]:
        self.init()
        out: list[SqlClause] = []
        for f in self.filters:
            clause = f.sql()
            if clause is not None:
                out.append(clause)
        return out

    def submit_label(self) -> str:
        return get_string("filter")
