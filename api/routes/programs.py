"""
Programs endpoint.

GET /api/programs                        → JSON array of program records
GET /api/programs?action=filter-options  → JSON object of four facet arrays

Any other ``action`` value is treated as the default.  A failed fetch
returns 500 with a generic message; the underlying error is logged only.
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from api.models import ErrorResponse, FilterOptionsOut, ProgramOut
from api.service import get_service
from sheets.service import ProgramsService

logger = logging.getLogger("program_tracker_api")

router = APIRouter(prefix="/programs", tags=["programs"])

FILTER_OPTIONS_ACTION = "filter-options"


@router.get(
    "",
    summary="List programs or filter options",
    responses={
        200: {"description": "Program records, or filter options when action=filter-options"},
        500: {"model": ErrorResponse, "description": "Upstream sheet could not be read"},
    },
)
def get_programs(
    action: str | None = Query(None, description="Set to 'filter-options' for facet lists"),
    service: ProgramsService = Depends(get_service),
) -> JSONResponse:
    """Return all programs, or the filter facets."""
    try:
        if action == FILTER_OPTIONS_ACTION:
            options = service.get_filter_options()
            return JSONResponse(content=FilterOptionsOut(**options.to_dict()).model_dump())
        programs = service.get_programs_data()
        data = [ProgramOut(**p.to_dict()).model_dump() for p in programs]
        return JSONResponse(content=data)
    except Exception:
        logger.exception("API Error")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch programs data"},
        )
