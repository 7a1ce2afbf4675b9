from __future__ import annotations

import pytest

from persons_api.repositories.errors import ConstraintViolationError
from persons_api.services.directory_service import (
    DirectoryService,
    NotFoundError,
    ValidationError,
)
from persons_api.services.seed_service import seed_database


@pytest.fixture()
def svc(store):
    seed_database(store)
    return DirectoryService(store)


@pytest.mark.parametrize(
    "payload",
    [
        None,
        [],
        {"age": 30, "email": "x@example.com"},
        {"name": "   ", "age": 30, "email": "x@example.com"},
        {"name": "X", "age": "30", "email": "x@example.com"},
        {"name": "X", "age": True, "email": "x@example.com"},
        {"name": "X", "age": 30.5, "email": "x@example.com"},
        {"name": "X", "age": 30},
        {"name": "Big", "age": 10**20, "email": "big@x.com"},
        {"name": "Small", "age": -(2**63) - 1, "email": "small@x.com"},
        {"name": "Big", "age": 1e20, "email": "big@x.com"},
        {"name": "\ud800", "age": 1, "email": "s@x.com"},
        {"name": "S", "age": 1, "email": "s\udfff@x.com"},
    ],
)
def test_create_person_rejects_invalid_payloads(svc, payload):
    with pytest.raises(ValidationError):
        svc.create_person(payload)


def test_create_person_trims_and_accepts_integral_float(svc):
    person = svc.create_person({"name": "  Dana  ", "age": 40.0, "email": " dana@x.com "})
    assert (person.name, person.age, person.email) == ("Dana", 40, "dana@x.com")
    assert svc.get_person(person.id) == person


def test_create_person_duplicate_email_propagates(svc):
    with pytest.raises(ConstraintViolationError):
        svc.create_person({"name": "Alice 2", "age": 1, "email": "alice@example.com"})


def test_update_person_checks_id_and_existence(svc):
    alice = svc.list_people("alice")[0]
    with pytest.raises(ValidationError, match="ID mismatch"):
        svc.update_person(alice.id, {"id": "other", "name": "A", "age": 1, "email": "a@x.com"})
    with pytest.raises(NotFoundError):
        svc.update_person("ghost", {"id": "ghost", "name": "A", "age": 1, "email": "a@x.com"})

    updated = svc.update_person(alice.id, {"id": alice.id, "name": "Alice J", "age": 30, "email": "aj@x.com"})
    assert updated.name == "Alice J"


def test_list_people_blank_search_returns_everyone(svc):
    assert len(svc.list_people("   ")) == len(svc.list_people()) == 3
    assert [p.name for p in svc.list_people("Mendez")] == ["Carla Mendez"]


def test_get_person_missing_raises(svc):
    with pytest.raises(NotFoundError):
        svc.get_person("ghost")


def test_get_user_roles_distinguishes_unknown_user(svc):
    with pytest.raises(NotFoundError):
        svc.get_user_roles("ghost")
    ben = svc.list_people("Ben")[0]
    assert [r.role_name for r in svc.get_user_roles(ben.id)] == ["user"]


def test_replace_user_roles_validation(svc):
    ben = svc.list_people("Ben")[0]
    with pytest.raises(ValidationError, match="ID mismatch"):
        svc.replace_user_roles(ben.id, {"user_id": "other", "role_id": []})
    with pytest.raises(ValidationError):
        svc.replace_user_roles(ben.id, {"user_id": ben.id})
    with pytest.raises(ValidationError):
        svc.replace_user_roles(ben.id, {"user_id": ben.id, "role_id": "not-a-list"})

    assert svc.replace_user_roles(ben.id, {"user_id": ben.id, "role_id": []}) == []


def test_assign_user_role_accepts_single_id(svc):
    carla = svc.list_people("Carla")[0]
    admin = svc.list_roles("admin")[0]
    roles = svc.assign_user_role({"user_id": carla.id, "role_id": admin.role_id})
    assert [r.role_name for r in roles] == ["admin"]
    with pytest.raises(ValidationError):
        svc.assign_user_role({"user_id": carla.id})


def test_role_workflow(svc):
    role = svc.create_role({"role_name": " editor "})
    assert role.role_name == "editor"
    assert svc.get_role(role.role_id) == role
    with pytest.raises(ValidationError):
        svc.create_role({})
    with pytest.raises(ValidationError, match="ID mismatch"):
        svc.update_role(role.role_id, {"role_id": "x", "role_name": "y"})
    with pytest.raises(NotFoundError):
        svc.update_role("missing", {"role_id": "missing", "role_name": "y"})
    assert svc.update_role(role.role_id, {"role_id": role.role_id, "role_name": "writer"}).role_name == "writer"
    svc.delete_role(role.role_id)
    with pytest.raises(NotFoundError):
        svc.get_role(role.role_id)


def test_create_person_accepts_64_bit_age_bounds(svc):
    person = svc.create_person({"name": "Max", "age": 2**63 - 1, "email": "max@x.com"})
    assert svc.get_person(person.id).age == 2**63 - 1


def test_user_role_ids_must_be_encodable(svc):
    ben = svc.list_people("Ben")[0]
    with pytest.raises(ValidationError):
        svc.replace_user_roles(ben.id, {"user_id": ben.id, "role_id": ["\ud800"]})
    with pytest.raises(ValidationError):
        svc.assign_user_role({"user_id": ben.id, "role_id": "\ud800"})
    with pytest.raises(ValidationError):
        svc.assign_user_role({"user_id": "\ud800", "role_id": "r"})
    assert [r.role_name for r in svc.get_user_roles(ben.id)] == ["user"]
