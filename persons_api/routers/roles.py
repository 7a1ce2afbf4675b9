from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Request, Response

from persons_api.routers import get_directory_service

router = APIRouter(prefix="/roles", tags=["roles"])


@router.get("")
def list_roles(request: Request, search: Optional[str] = None):
    return [role.as_dict() for role in get_directory_service(request).list_roles(search)]


@router.get("/{role_id}")
def get_role(role_id: str, request: Request):
    return get_directory_service(request).get_role(role_id).as_dict()


@router.post("", status_code=201)
def create_role(request: Request, payload: Any = Body(default=None)):
    return get_directory_service(request).create_role(payload).as_dict()


@router.put("/{role_id}")
def update_role(role_id: str, request: Request, payload: Any = Body(default=None)):
    return get_directory_service(request).update_role(role_id, payload).as_dict()


@router.delete("/{role_id}", status_code=204)
def delete_role(role_id: str, request: Request):
    get_directory_service(request).delete_role(role_id)
    return Response(status_code=204)
