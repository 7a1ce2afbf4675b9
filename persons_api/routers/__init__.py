"""
FastAPI routers grouped by resource (people, roles, user_roles).

Each module exposes an APIRouter included by ``persons_api.app.create_app``.
Endpoints stay thin: they fetch the DirectoryService from ``app.state`` and
let the registered error handlers turn service exceptions into responses.
"""

from __future__ import annotations

from fastapi import Request

from persons_api.services.directory_service import DirectoryService


def get_directory_service(request: Request) -> DirectoryService:
    svc = getattr(getattr(request.app, "state", None), "directory_service", None)
    if not svc:
        raise RuntimeError("DirectoryService not configured")
    return svc
