"""
Programs service dependency for the API routes.

create_app() stores the ProgramsService on ``app.state``; routes receive it
through get_service() rather than importing a module-level instance, so
tests can hand the app a stub service.

Usage in a route::

    from api.service import get_service
    from fastapi import Depends

    @router.get("/example")
    def example(service=Depends(get_service)):
        ...
"""

from fastapi import Request

from sheets.service import ProgramsService


def get_service(request: Request) -> ProgramsService:
    """FastAPI dependency: return the app's ProgramsService."""
    service = getattr(request.app.state, "programs_service", None)
    if service is None:
        raise RuntimeError("Programs service not configured; build the app with create_app()")
    return service
