"""
People, role and role-assignment use cases behind the REST endpoints.

Payloads arrive as plain JSON dicts; only presence and type are checked here.
"""

from __future__ import annotations

from typing import Any, Optional

from persons_api.core.ids import generate_id
from persons_api.db.session import Store
from persons_api.domain.records import Person, Role
from persons_api.repositories.sql_repository import (
    PersonRepository,
    RoleRepository,
    UserRoleRepository,
)


class DirectoryError(Exception):
    """Base exception for directory workflows."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DirectoryError):
    """Raised when a payload misses required fields or has the wrong types."""


class NotFoundError(DirectoryError):
    """Raised when an id does not match any stored record."""


# SQLite stores integers as signed 64-bit values
MIN_AGE = -2**63
MAX_AGE = 2**63 - 1

PERSON_FIELDS_MESSAGE = "Invalid data: name, age, and email are required"
USER_ROLE_FIELDS_MESSAGE = "Invalid data: user_id and role_id are required"


def _storable(value: str) -> bool:
    # lone surrogates survive JSON decoding but cannot be encoded for SQLite
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _text(payload: dict, key: str) -> Optional[str]:
    value = payload.get(key)
    if not isinstance(value, str) or not _storable(value):
        return None
    value = value.strip()
    return value or None


def _id_list(value: Any) -> Optional[list[str]]:
    if not isinstance(value, list):
        return None
    if not all(isinstance(v, str) and v and _storable(v) for v in value):
        return None
    return value


def _age(value: Any) -> Optional[int]:
    # bool is an int subclass but never a valid age
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and MIN_AGE <= value <= MAX_AGE:
        return value
    return None


def _require_dict(payload: Any) -> dict:
    if not isinstance(payload, dict):
        raise ValidationError("Invalid data: expected a JSON object")
    return payload


def _same_id(body_id: Any, path_id: str) -> bool:
    return body_id is not None and str(body_id) == path_id and _storable(path_id)


class DirectoryService:
    """Validates requests and delegates to the repositories."""

    def __init__(self, store: Store) -> None:
        self.people = PersonRepository(store)
        self.roles = RoleRepository(store)
        self.user_roles = UserRoleRepository(store)

    # -------------------------------------- people --------------------------------------
    def _person_fields(self, payload: dict) -> tuple[str, int, str]:
        name = _text(payload, "name")
        email = _text(payload, "email")
        age = _age(payload.get("age"))
        if name is None or email is None or age is None:
            raise ValidationError(PERSON_FIELDS_MESSAGE)
        return name, age, email

    def list_people(self, search: Optional[str] = None) -> list[Person]:
        query = (search or "").strip()
        if query:
            return self.people.search(query)
        return self.people.get_all()

    def get_person(self, person_id: str) -> Person:
        person = self.people.get_by_id(person_id)
        if person is None:
            raise NotFoundError("Person not found")
        return person

    def create_person(self, payload: Any) -> Person:
        name, age, email = self._person_fields(_require_dict(payload))
        return self.people.insert(generate_id(), name, age, email)

    def update_person(self, person_id: str, payload: Any) -> Person:
        payload = _require_dict(payload)
        if not _same_id(payload.get("id"), person_id):
            raise ValidationError("ID mismatch")
        name, age, email = self._person_fields(payload)
        person = self.people.update(person_id, name, age, email)
        if person is None:
            raise NotFoundError("Person not found")
        return person

    def delete_person(self, person_id: str) -> None:
        self.people.delete(person_id)

    # -------------------------------------- roles --------------------------------------
    def list_roles(self, search: Optional[str] = None) -> list[Role]:
        query = (search or "").strip()
        if query:
            return self.roles.search_roles(query)
        return self.roles.get_all_roles()

    def get_role(self, role_id: str) -> Role:
        role = self.roles.get_role_by_id(role_id)
        if role is None:
            raise NotFoundError("Role not found")
        return role

    def create_role(self, payload: Any) -> Role:
        role_name = _text(_require_dict(payload), "role_name")
        if role_name is None:
            raise ValidationError("Invalid data: role_name is required")
        return self.roles.insert_role(generate_id(), role_name)

    def update_role(self, role_id: str, payload: Any) -> Role:
        payload = _require_dict(payload)
        if not _same_id(payload.get("role_id"), role_id):
            raise ValidationError("ID mismatch")
        role_name = _text(payload, "role_name")
        if role_name is None:
            raise ValidationError("Invalid data: role_name is required")
        role = self.roles.update_role(role_id, role_name)
        if role is None:
            raise NotFoundError("Role not found")
        return role

    def delete_role(self, role_id: str) -> None:
        self.roles.delete_role(role_id)

    # -------------------------------------- user roles --------------------------------------
    def get_user_roles(self, user_id: str) -> list[Role]:
        if self.people.get_by_id(user_id) is None:
            raise NotFoundError("User not found")
        return self.user_roles.get_user_roles(user_id)

    def replace_user_roles(self, user_id: str, payload: Any) -> list[Role]:
        payload = _require_dict(payload)
        if not _same_id(payload.get("user_id"), user_id):
            raise ValidationError("ID mismatch")
        role_ids = _id_list(payload.get("role_id"))
        if role_ids is None:
            raise ValidationError(USER_ROLE_FIELDS_MESSAGE)
        self.user_roles.set_roles_for_user(user_id, role_ids)
        return self.user_roles.get_user_roles(user_id)

    def assign_user_role(self, payload: Any) -> list[Role]:
        """POST alias: replaces the user's set with the given role id(s)."""
        payload = _require_dict(payload)
        user_id = _text(payload, "user_id")
        role_ids = payload.get("role_id")
        if isinstance(role_ids, str) and role_ids.strip():
            role_ids = [role_ids.strip()]
        role_ids = _id_list(role_ids)
        if user_id is None or not role_ids:
            raise ValidationError(USER_ROLE_FIELDS_MESSAGE)
        self.user_roles.set_roles_for_user(user_id, role_ids)
        return self.user_roles.get_user_roles(user_id)
