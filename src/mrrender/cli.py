from __future__ import annotations

import argparse
import logging
import sqlite3
import sys
from contextlib import closing
from pathlib import Path

from . import store
from .reports import table_report


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mrrender", description="mrrender – serve database tables as reports"
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    serve_p = sub.add_parser(
        "serve",
        help="Serve a SQLite table as a sortable, paged report",
    )
    serve_p.add_argument("db", help="Path to a SQLite database file")
    serve_p.add_argument("table", help="Table to report on")
    serve_p.add_argument(
        "--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)"
    )
    serve_p.add_argument(
        "--port", type=int, default=8000, help="Port to bind (default: 8000)"
    )
    serve_p.add_argument(
        "--perpage",
        type=int,
        default=None,
        help="Rows per page (default: from mrrender.ini, else 25)",
    )
    serve_p.add_argument(
        "--filter",
        action="append",
        default=[],
        metavar="COLUMN",
        help="Add a text filter on COLUMN (repeatable)",
    )
    serve_p.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce uvicorn logging noise",
    )

    return p


def table_columns(db: Path, table: str) -> list[str]:
    if '"' in table:
        return []
    with closing(sqlite3.connect(db)) as conn:
        info = conn.execute(f'PRAGMA table_info("{table}")').fetchall()
    # (cid, name, type, notnull, default, pk)
    return [str(row[1]) for row in info]


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.cmd == "serve":
        db = Path(args.db).expanduser()
        if not db.is_file():
            print(f"mrrender: no such database: {db}", file=sys.stderr)
            return 2

        columns = table_columns(db, args.table)
        if not columns:
            print(f"mrrender: no such table: {args.table}", file=sys.stderr)
            return 2

        try:
            report_cls = table_report(
                args.table, columns, filter_columns=args.filter, perpage=args.perpage
            )
        except ValueError as e:
            print(f"mrrender: {e}", file=sys.stderr)
            return 2

        store.register_report(
            report_cls, lambda: sqlite3.connect(db, check_same_thread=False)
        )

        import uvicorn

        from .app import app

        log_level = "warning" if args.quiet else "info"
        logging.basicConfig(level=getattr(logging, log_level.upper()))
        print(f"mrrender: http://{args.host}:{args.port}/reports/{args.table}")
        try:
            uvicorn.run(app, host=args.host, port=args.port, log_level=log_level)
        except KeyboardInterrupt:
            return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
