# src/mrrender/reports.py
from __future__ import annotations

import html
import logging
from typing import Any, Mapping, Sequence

import bleach
import pandas as pd

from . import config
from .filters import Filter, FilterForm, TextFilter
from .urls import PageUrl
from .widgets import Cell, Column, Export, Paging, SortState, Table

logger = logging.getLogger(__name__)

ExecutedSql = tuple[str, list[Any] | None]


class Report:
    """
    Base class for SQL-backed reports.

    Subclasses provide ``columns()`` and ``sql()``; everything else (filter
    restrictions, counting, sorting, paging, export) is handled here. The
    query from ``sql()`` is wrapped as a subquery, so filters and sorting
    refer to its output column names.
    """

    name: str = "report"
    description: str | None = None
    perpage: int | None = None
    perpage_opts: Sequence[int | str] = (10, 25, 50, 100, "all")
    exports: Sequence[str] = ("csv", "json")
    sort_enabled: bool = True
    default_sort: SortState = SortState()

    def __init__(
        self,
        connection: Any,
        url: PageUrl,
        params: Mapping[str, Any] | None = None,
    ) -> None:
        self.connection = connection
        self.params: dict[str, Any] = dict(params or {})
        self._filters = self.filters()
        self.url = url.with_params(**self._state_params())
        self.executed_sql: list[ExecutedSql] = []
        self._filled = False

        self.table = Table(
            columns=self.columns(),
            sort=self._requested_sort(),
            sort_enabled=self.sort_enabled,
            url=self.url,
        )
        self.paging = Paging(
            url=self.url,
            page=_as_int(self.params.get(Paging.REQUEST_PAGE), 0, minimum=0),
            perpage=_as_int(
                self.params.get(Paging.REQUEST_PERPAGE),
                self.perpage or config.get_report_settings().default_perpage,
                minimum=1,
            ),
            perpage_opts=self.perpage_opts,
        )

        self.filter: FilterForm | None = None
        if self._filters:
            self.filter = FilterForm(
                url=self.url, filters=self._filters, preferences=self.params
            )

        self.export: Export | None = None
        if self.exports:
            exporting = self.params.get(Export.REQUEST_EXPORTER) or None
            if exporting is not None and exporting not in self.exports:
                raise ValueError(f"unsupported export format: {exporting!r}")
            self.export = Export(url=self.url, formats=self.exports, exporting=exporting)

    # ---- To override --------------------------------------------------------------

    def columns(self) -> list[Column]:
        raise NotImplementedError

    def sql(self) -> tuple[str, list[Any] | None]:
        raise NotImplementedError

    def filters(self) -> list[Filter]:
        return []

    def output_wrapper(self, html: str) -> str:
        """Hook to wrap the rendered table in extra markup."""
        return html

    # ---- Filling ------------------------------------------------------------------

    def get_description(self) -> str | None:
        return self.description

    def get_executedsql(self) -> list[ExecutedSql]:
        return list(self.executed_sql)

    def is_exporting(self) -> bool:
        return self.export is not None and self.export.is_exporting()

    def table_fill(self) -> None:
        """Run the report query and load the rows into the table. Runs once."""
        if self._filled:
            return

        base, base_params = self.sql()
        params: list[Any] = list(base_params or [])

        where: list[str] = []
        if self.filter is not None:
            for clause, clause_params in self.filter.sql():
                where.append(f"({clause})")
                params.extend(clause_params)

        inner = f"SELECT * FROM ({base.strip().rstrip(';')}) mrreport"
        if where:
            inner += " WHERE " + " AND ".join(where)

        count_sql = f"SELECT COUNT(1) AS total FROM ({inner}) mrcount"
        total = int(self._query(count_sql, params).iloc[0, 0])
        self.paging.total = total

        query = inner + self._order_by()
        query_params = list(params)
        if not self.is_exporting() and self.paging.perpage:
            # Step back to the last page if the requested one is past the end
            if self.paging.offset() >= total and total > 0:
                self.paging.page = self.paging.page_count() - 1
            query += " LIMIT ? OFFSET ?"
            query_params += [self.paging.perpage, self.paging.offset()]

        frame = self._query(query, query_params)
        # NULLs come back as NaN; extractors should see None
        frame = frame.astype(object).where(frame.notna(), None)
        self.table.rows = frame.to_dict(orient="records")
        self._filled = True
        logger.debug(
            "report %s filled: %d of %d rows", self.name, len(self.table.rows), total
        )

    def _query(self, sql: str, params: list[Any]) -> pd.DataFrame:
        self.executed_sql.append((sql, params or None))
        return pd.read_sql_query(sql, self.connection, params=params or None)

    def _order_by(self) -> str:
        sort = self.table.sort
        if not self.sort_enabled or sort.column is None:
            return ""
        column = self.table.get_column(sort.column)
        if column is None or not column.config.sortable:
            return ""
        direction = "DESC" if sort.order == "desc" else "ASC"
        return f' ORDER BY "{column.name}" {direction}'

    def _requested_sort(self) -> SortState:
        column = self.params.get(Table.REQUEST_SORT) or self.default_sort.column
        order = self.params.get(Table.REQUEST_ORDER) or self.default_sort.order
        if order not in ("asc", "desc"):
            order = "asc"
        return SortState(column=column, order=order)

    def _state_params(self) -> dict[str, Any]:
        keep = (Table.REQUEST_SORT, Table.REQUEST_ORDER, Paging.REQUEST_PERPAGE)
        state = {k: self.params[k] for k in keep if self.params.get(k)}
        for f in self._filters:
            for name in f.preferences_defaults():
                if self.params.get(name) not in (None, ""):
                    state[name] = self.params[name]
        return state

    # ---- Export -------------------------------------------------------------------

    def export_frame(self) -> pd.DataFrame:
        """
        All filtered rows as plain text, one column per table column,
        headed by the column headings.
        """
        self.table_fill()
        data: dict[str, list[str]] = {}
        for column in self.table.columns:
            heading = column.heading or column.name
            data[heading] = [_plain(column.get_cell(row)) for row in self.table.rows]
        return pd.DataFrame(data, columns=list(data))

    def export_content(self) -> tuple[bytes, str, str]:
        """Return (payload, media type, filename) for the requested format."""
        if self.export is None or self.export.exporting is None:
            raise ValueError("report is not exporting")
        fmt = self.export.exporting
        frame = self.export_frame()
        logger.info("exporting report %s as %s (%d rows)", self.name, fmt, len(frame))
        if fmt == "csv":
            return frame.to_csv(index=False).encode("utf-8"), "text/csv", f"{self.name}.csv"
        if fmt == "json":
            payload = frame.to_json(orient="records", force_ascii=False)
            return payload.encode("utf-8"), "application/json", f"{self.name}.json"
        raise ValueError(f"unsupported export format: {fmt!r}")


def _plain(value: Any) -> str:
    if isinstance(value, Cell):
        return html.unescape(bleach.clean(value.text, tags=[], strip=True))
    if value is None:
        return ""
    return str(value)


def _as_int(raw: Any, default: int, *, minimum: int) -> int:
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return max(minimum, value)


def table_report(
    table: str,
    columns: Sequence[str],
    *,
    filter_columns: Sequence[str] = (),
    perpage: int | None = None,
) -> type[Report]:
    """
    Build a Report class listing every row of one database table.

    ``filter_columns`` get a substring text filter each.
    """
    for name in [table, *columns]:
        if '"' in name:
            raise ValueError(f"unsupported identifier: {name!r}")
    unknown = [c for c in filter_columns if c not in columns]
    if unknown:
        raise ValueError(f"filter columns not in table {table!r}: {', '.join(unknown)}")

    def _columns(self: Report) -> list[Column]:
        return [Column(name=c, heading=c.replace("_", " ").capitalize()) for c in columns]

    def _sql(self: Report) -> tuple[str, list[Any] | None]:
        return f'SELECT * FROM "{table}"', None

    def _filters(self: Report) -> list[Filter]:
        return [
            TextFilter(c, c.replace("_", " ").capitalize(), field=f'"{c}"')
            for c in filter_columns
        ]

    return type(
        f"{table.title().replace('_', '')}Report",
        (Report,),
        {
            "name": table,
            "perpage": perpage,
            "columns": _columns,
            "sql": _sql,
            "filters": _filters,
        },
    )
