# src/mrrender/widgets.py
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Callable, Literal, Sequence

from . import config
from .strings import get_string
from .urls import PageUrl

SortOrder = Literal["asc", "desc"]
NotifyLevel = Literal["problem", "success", "message"]


# ---- Table value types -----------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Cell:
    """
    One rendered table cell. ``text`` is markup and is emitted as-is.
    """

    text: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    colspan: int | None = None
    rowspan: int | None = None
    header: bool = False
    abbr: str | None = None
    scope: str | None = None
    style: str | None = None


# Column attribute names that set a Cell field instead of landing in the bag.
CELL_FIELDS: frozenset[str] = frozenset(
    f.name for f in fields(Cell) if f.name != "attributes"
)


@dataclass(frozen=True, slots=True)
class Row:
    """A finished row. Tables pass these through without touching them."""

    cells: tuple[Cell, ...]
    attributes: dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.cells)


@dataclass(frozen=True, slots=True)
class Grid:
    head: list[Cell]
    rows: list[Row]
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ColumnConfig:
    sortable: bool = True
    suppress: bool = False
    attributes: dict[str, str] = field(default_factory=dict)


def _lookup(name: str) -> Callable[[Any], Any]:
    def extract(row: Any) -> Any:
        if isinstance(row, dict):
            return row.get(name, "")
        return getattr(row, name, "")

    return extract


@dataclass(slots=True)
class Column:
    name: str
    heading: str | None = None
    extractor: Callable[[Any], Any] | None = None
    config: ColumnConfig = field(default_factory=ColumnConfig)

    def __post_init__(self) -> None:
        if self.extractor is None:
            self.extractor = _lookup(self.name)

    def has_heading(self) -> bool:
        return bool(self.heading)

    def get_cell(self, row: Any) -> Any:
        return self.extractor(row)


@dataclass(frozen=True, slots=True)
class SortState:
    column: str | None = None
    order: SortOrder = "asc"

    def toggled_for(self, name: str) -> SortOrder:
        """Order a sort link on column ``name`` should request."""
        if self.column == name and self.order == "asc":
            return "desc"
        return "asc"


@dataclass(slots=True)
class Table:
    columns: list[Column]
    rows: list[Any] = field(default_factory=list)
    sort: SortState = field(default_factory=SortState)
    sort_enabled: bool = field(default_factory=config.get_sort_enabled_default)
    empty_message: str = field(default_factory=lambda: get_string("nothingtodisplay"))
    url: PageUrl = field(default_factory=lambda: PageUrl(""))
    attributes: dict[str, str] = field(default_factory=dict)

    REQUEST_SORT = "tsort"
    REQUEST_ORDER = "torder"

    def get_column(self, name: str) -> Column | None:
        for column in self.columns:
            if column.name == name:
                return column
        return None


# ---- Page widgets ----------------------------------------------------------------


@dataclass(slots=True)
class Notify:
    messages: list[tuple[str, NotifyLevel]] = field(default_factory=list)

    def add(self, message: str, level: NotifyLevel = "problem") -> Notify:
        self.messages.append((message, level))
        return self

    def good(self, message: str) -> Notify:
        return self.add(message, "success")

    def bad(self, message: str) -> Notify:
        return self.add(message, "problem")


@dataclass(frozen=True, slots=True)
class Tab:
    id: str
    url: str
    label: str


@dataclass(slots=True)
class Tabs:
    rows: list[list[Tab]] = field(default_factory=list)
    toptab: str | None = None
    subtab: str | None = None

    # Second-row tabs keyed by the top tab they belong to
    subtabs: dict[str, list[Tab]] = field(default_factory=dict)

    def add(self, tab: Tab) -> Tabs:
        if not self.rows:
            self.rows.append([])
        self.rows[0].append(tab)
        return self

    def add_sub(self, parent: str, tab: Tab) -> Tabs:
        self.subtabs.setdefault(parent, []).append(tab)
        return self

    def set(self, toptab: str, subtab: str | None = None) -> Tabs:
        self.toptab = toptab
        self.subtab = subtab
        return self

    def get_rows(self) -> list[list[Tab]]:
        rows = [list(r) for r in self.rows if r]
        if rows and self.toptab is not None and self.subtabs.get(self.toptab):
            rows.append(list(self.subtabs[self.toptab]))
        return rows


@dataclass(slots=True)
class Heading:
    text: str = ""
    level: int = 2
    classes: str = "main"
    id: str | None = None
    icon: str | None = None
    iconalt: str = ""
    helpidentifier: str | None = None
    helpurl: str | None = None


@dataclass(slots=True)
class Paging:
    url: PageUrl
    total: int = 0
    page: int = 0
    perpage: int = 0
    perpage_opts: Sequence[int | str] = ()

    REQUEST_PAGE = "page"
    REQUEST_PERPAGE = "perpage"

    def page_count(self) -> int:
        if self.perpage <= 0:
            return 1
        return max(1, -(-self.total // self.perpage))

    def offset(self) -> int:
        return max(0, self.page) * max(0, self.perpage)


@dataclass(slots=True)
class Export:
    url: PageUrl
    formats: Sequence[str] = ("csv", "json")
    exporting: str | None = None

    REQUEST_EXPORTER = "mrexporter"

    def is_exporting(self) -> bool:
        return self.exporting is not None

    def get_select_options(self) -> dict[str, str]:
        return {
            fmt: get_string("exportas", format=get_string(fmt)) for fmt in self.formats
        }
