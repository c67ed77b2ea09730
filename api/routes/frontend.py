"""
Frontend HTML routes.

Serves the Jinja2 dashboard page.  All view state (search, filters, sort,
column widths) travels in the query string:

    q, status, priority, team, owner   search text and facet filters
    sort, dir                          active sort column and direction
    toggle=<column>                    apply one header click to the sort
    w_<column>                         column widths in pixels

Routes:
    GET /    → index.html (summary cards, filter bar, programs table)
"""

from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from api.service import get_service
from dashboard.client import ProgramsHook, ServiceProgramsSource
from dashboard.table import (
    COLUMNS,
    MIN_COLUMN_WIDTH,
    ColumnWidths,
    sort_indicator,
)
from dashboard.view_state import STATUS_CARDS, ViewState, derive_view
from sheets.service import ProgramsService

router = APIRouter(tags=["frontend"])

# Templates instance is set by create_app() after mounting.
_templates: Jinja2Templates | None = None


def set_templates(t: Jinja2Templates) -> None:
    global _templates
    _templates = t


def _tmpl() -> Jinja2Templates:
    if _templates is None:
        raise RuntimeError("Templates not initialised — call set_templates() first")
    return _templates


def page_url(state: ViewState, widths: ColumnWidths) -> str:
    """Dashboard URL carrying *state* and any non-default widths."""
    params = {**state.to_query_params(), **widths.to_query_params()}
    return "/?" + urlencode(params) if params else "/"


def _parse_state(request: Request) -> ViewState:
    params = request.query_params
    state = ViewState.from_query_params(params)
    toggle = params.get("toggle")
    if toggle:
        state = state.toggle_sort(toggle)
    return state


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index(
    request: Request,
    service: ProgramsService = Depends(get_service),
) -> HTMLResponse:
    """Dashboard page."""
    state = _parse_state(request)
    widths = ColumnWidths.from_query_params(request.query_params)

    hook = ProgramsHook(ServiceProgramsSource(service))
    hook.load()
    view = derive_view(hook.programs, state) if hook.error is None else None

    return _tmpl().TemplateResponse(
        request,
        "index.html",
        {
            "state":          state,
            "widths":         widths,
            "columns":        COLUMNS,
            "min_width":      MIN_COLUMN_WIDTH,
            "filter_options": hook.filter_options,
            "error":          hook.error,
            "view":           view,
            "status_cards":   STATUS_CARDS,
            "sort_indicator": sort_indicator,
            "page_url":       page_url,
        },
    )
