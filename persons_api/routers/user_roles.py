from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request

from persons_api.routers import get_directory_service

router = APIRouter(prefix="/user_roles", tags=["user_roles"])


@router.get("/{user_id}/roles")
def get_user_roles(user_id: str, request: Request):
    return [role.as_dict() for role in get_directory_service(request).get_user_roles(user_id)]


@router.put("/{user_id}/roles")
def replace_user_roles(user_id: str, request: Request, payload: Any = Body(default=None)):
    roles = get_directory_service(request).replace_user_roles(user_id, payload)
    return [role.as_dict() for role in roles]


@router.post("", status_code=201)
def create_user_role(request: Request, payload: Any = Body(default=None)):
    roles = get_directory_service(request).assign_user_role(payload)
    return [role.as_dict() for role in roles]
