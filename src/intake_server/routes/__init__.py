"""Route registration — mounts all routers under ``/api``."""

from fastapi import FastAPI

from intake_server.routes.cases import router as cases_router
from intake_server.routes.notes import router as notes_router
from intake_server.routes.pathways import router as pathways_router
from intake_server.routes.reference import router as reference_router

API_PREFIX = "/api"


def register_routes(app: FastAPI) -> None:
    """Include all sub-routers under the API prefix."""
    app.include_router(cases_router, prefix=API_PREFIX)
    app.include_router(notes_router, prefix=API_PREFIX)
    app.include_router(pathways_router, prefix=API_PREFIX)
    app.include_router(reference_router, prefix=API_PREFIX)
