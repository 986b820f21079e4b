# src/mrrender/app.py
from __future__ import annotations

import logging
from contextlib import closing

from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.responses import HTMLResponse, Response

from . import config, store
from .context import AuthorizationContext, RenderContext
from .html import render_page
from .renderers import register_default_renderers
from .renderers.registry import render
from .tag import escape_html
from .urls import PageUrl
from .widgets import Heading

logger = logging.getLogger(__name__)

app = FastAPI()

SETTINGS = config.get_report_settings()
config.set_pix_base_url(SETTINGS.pix_base_url)
register_default_renderers()


@app.get("/reports")
def list_reports() -> dict[str, list[str]]:
    return {"reports": store.list_reports()}


@app.get("/reports/{name}")
def show_report(
    name: str,
    request: Request,
    x_remote_user: str | None = Header(default=None),
) -> Response:
    """
    Render a registered report, or send its export when ``mrexporter`` is set.

    Query parameters feed filter values, sorting (tsort/torder) and paging.
    """
    try:
        entry = store.get_report(name)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))

    params = dict(request.query_params)
    url = PageUrl(request.url.path)
    auth = AuthorizationContext.for_username(x_remote_user, settings=SETTINGS)

    with closing(entry.connect()) as connection:
        try:
            report = entry.report_cls(connection, url, params)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        if report.is_exporting():
            payload, media_type, filename = report.export_content()
            headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
            return Response(payload, media_type=media_type, headers=headers)

        ctx = RenderContext(auth=auth)
        body = render(Heading(text=escape_html(report.name)), ctx=ctx) + render(report, ctx=ctx)

    logger.debug("rendered report %s for %s", name, x_remote_user or "anonymous")
    return HTMLResponse(render_page(title=report.name, body=body))
