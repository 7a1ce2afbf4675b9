from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Request, Response

from persons_api.routers import get_directory_service

router = APIRouter(prefix="/people", tags=["people"])


@router.get("")
def list_people(request: Request, search: Optional[str] = None):
    svc = get_directory_service(request)
    return [person.as_dict() for person in svc.list_people(search)]


@router.get("/{person_id}")
def get_person(person_id: str, request: Request):
    return get_directory_service(request).get_person(person_id).as_dict()


@router.post("", status_code=201)
def create_person(request: Request, payload: Any = Body(default=None)):
    return get_directory_service(request).create_person(payload).as_dict()


@router.put("/{person_id}")
def update_person(person_id: str, request: Request, payload: Any = Body(default=None)):
    return get_directory_service(request).update_person(person_id, payload).as_dict()


@router.delete("/{person_id}", status_code=204)
def delete_person(person_id: str, request: Request):
    get_directory_service(request).delete_person(person_id)
    return Response(status_code=204)
