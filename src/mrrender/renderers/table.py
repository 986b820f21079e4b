# src/mrrender/renderers/table.py
from __future__ import annotations

from dataclasses import replace
from typing import Any

from .base import RenderResult
from .. import config
from ..context import RenderContext
from ..strings import get_string
from ..tag import accesshide, escape_html, img, link, render_attrs, tag
from ..widgets import CELL_FIELDS, Cell, Column, Grid, Row, Table


class TableRenderer:
    kind = "table"

    def can_render(self, obj: Any) -> bool:
        return isinstance(obj, Table)

    def render(self, obj: Any, *, ctx: RenderContext) -> RenderResult:
        grid = build_grid(obj)
        return RenderResult(
            kind="table",
            html=grid_to_html(grid),
            meta={"rows": len(obj.rows), "columns": len(obj.columns)},
        )


def build_grid(table: Table) -> Grid:
    """
    Turn a Table into header cells and body rows.

    The table and its columns are left untouched, so the same Table can be
    rendered again (or concurrently) with identical output.
    """
    head = _build_head(table)

    attributes = {"class": "generaltable"}
    attributes.update(table.attributes)

    if not table.rows:
        empty = Cell(text=escape_html(table.empty_message), colspan=len(head))
        return Grid(head=head, rows=[Row(cells=(empty,))], attributes=attributes)

    rows: list[Row] = []
    suppress: dict[int, str] = {}
    for raw in table.rows:
        if isinstance(raw, Row):
            # Shown as given, but still counts as the row above the next one
            _apply_suppression(table.columns, list(raw.cells), suppress, blank=False)
            rows.append(raw)
            continue
        cells = [_build_cell(column, raw) for column in table.columns]
        rows.append(Row(cells=tuple(_apply_suppression(table.columns, cells, suppress))))

    return Grid(head=head, rows=rows, attributes=attributes)


def _build_head(table: Table) -> list[Cell]:
    if not any(column.has_heading() for column in table.columns):
        return []

    head: list[Cell] = []
    sortable_table = table.sort_enabled and bool(table.rows)
    for column in table.columns:
        label = escape_html(column.heading or "")
        if sortable_table and column.config.sortable:
            text = _sort_heading(table, column, label)
        else:
            text = label
        head.append(
            Cell(text=text, attributes=dict(column.config.attributes), header=True)
        )
    return head


def _sort_heading(table: Table, column: Column, label: str) -> str:
    torder = table.sort.toggled_for(column.name)

    icon = ""
    if table.sort.column == column.name:
        if table.sort.order == "asc":
            icon = img(config.pix_url("t/down"), get_string("asc"), {"class": "iconsort"})
        else:
            icon = img(config.pix_url("t/up"), get_string("desc"), {"class": "iconsort"})

    url = table.url.out(**{Table.REQUEST_SORT: column.name, Table.REQUEST_ORDER: torder})
    hint = f"{get_string('sortby')} {column.heading} {get_string(torder)}"
    return link(label + accesshide(hint), url) + icon


def _build_cell(column: Column, row: Any) -> Cell:
    value = column.get_cell(row)
    if isinstance(value, Cell):
        return value

    text = "" if value is None else escape_html(str(value))
    overrides: dict[str, Any] = {}
    attributes: dict[str, str] = {}
    for name, attr in column.config.attributes.items():
        if name in CELL_FIELDS:
            overrides[name] = attr
        else:
            attributes[name] = attr
    cell = Cell(text=text, attributes=attributes)
    if overrides:
        cell = replace(cell, **overrides)
    return cell


def _apply_suppression(
    columns: list[Column],
    cells: list[Cell],
    suppress: dict[int, str],
    *,
    blank: bool = True,
) -> list[Cell]:
    """
    Blank repeated values in suppressing columns. ``suppress`` carries the
    last shown text per column position from one row to the next.
    """
    for position, column in enumerate(columns):
        if not column.config.suppress or position >= len(cells):
            continue
        text = cells[position].text

        if position in suppress and suppress[position] == text:
            if blank:
                cells[position] = replace(cells[position], text="")
            continue

        # A changed value forces every column to its right to show again
        for key in [k for k in suppress if k > position]:
            del suppress[key]
        suppress[position] = text
    return cells


def grid_to_html(grid: Grid) -> str:
    parts: list[str] = [f"<table{render_attrs(grid.attributes)}>"]
    if grid.head:
        head = "".join(_cell_html(c, index, "th") for index, c in enumerate(grid.head))
        parts.append(f"<thead><tr>{head}</tr></thead>")

    parts.append("<tbody>")
    for index, row in enumerate(grid.rows):
        row_attrs = {"class": f"r{index % 2}"}
        row_attrs.update(row.attributes)
        cells = "".join(
            _cell_html(c, position, "th" if c.header else "td")
            for position, c in enumerate(row.cells)
        )
        parts.append(f"<tr{render_attrs(row_attrs)}>{cells}</tr>")
    parts.append("</tbody></table>")
    return "".join(parts)


def _cell_html(cell: Cell, position: int, name: str) -> str:
    attrs: dict[str, Any] = {"class": f"cell c{position}"}
    for key, value in cell.attributes.items():
        if key == "class":
            attrs["class"] = f"{attrs['class']} {value}"
        else:
            attrs[key] = value
    attrs["colspan"] = cell.colspan
    attrs["rowspan"] = cell.rowspan
    attrs["abbr"] = cell.abbr
    attrs["scope"] = cell.scope or ("col" if name == "th" else None)
    attrs["style"] = cell.style
    return tag(name, cell.text, attrs)
