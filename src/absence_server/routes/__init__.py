"""Route registration — mounts all routers under ``/api/v1``."""

from fastapi import FastAPI

from absence_server.routes.cases import router as cases_router
from absence_server.routes.catalog import router as catalog_router

API_PREFIX = "/api/v1"


def register_routes(app: FastAPI) -> None:
    """Include all sub-routers under the versioned API prefix.

    The catalog router goes first so its literal paths (``/catalog``,
    ``/return-to-work``) are never shadowed by ``/{case_id}`` routes.
    """
    app.include_router(catalog_router, prefix=API_PREFIX)
    app.include_router(cases_router, prefix=API_PREFIX)
