"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from persons_api.db.models import Person as PersonRow
from persons_api.db.models import Role as RoleRow
from persons_api.db.models import UserRole
from persons_api.db.session import Store
from persons_api.domain.records import Person, Role
from .errors import ConstraintViolationError, RoleAssignmentError

logger = logging.getLogger(__name__)


def _like(query: str) -> str:
    return f"%{query}%"


class PersonRepository:
    """CRUD helpers for the people table."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def get_all(self) -> list[Person]:
        with self.store.session() as session:
            rows = session.execute(select(PersonRow).order_by(PersonRow.name)).scalars().all()
            return [Person.from_entity(row) for row in rows]

    def search(self, query: str) -> list[Person]:
        pattern = _like(query)
        with self.store.session() as session:
            stmt = (
                select(PersonRow)
                .where(PersonRow.name.like(pattern) | PersonRow.email.like(pattern))
                .order_by(PersonRow.name)
            )
            return [Person.from_entity(row) for row in session.execute(stmt).scalars().all()]

    def get_by_id(self, id: str) -> Optional[Person]:
        with self.store.session() as session:
            row = session.get(PersonRow, id)
            return Person.from_entity(row) if row else None

    def count(self) -> int:
        with self.store.session() as session:
            return int(session.execute(select(func.count()).select_from(PersonRow)).scalar_one())

    def insert(self, id: str, name: str, age: int, email: str) -> Person:
        try:
            with self.store.write() as session:
                session.add(PersonRow(id=id, name=name, age=age, email=email))
        except IntegrityError as exc:
            logger.warning("Rejected person insert %s: %s", id, exc.orig)
            raise ConstraintViolationError(f"Person {id} conflicts with an existing record") from exc
        return self.get_by_id(id)

    def update(self, id: str, name: str, age: int, email: str) -> Optional[Person]:
        """Overwrite name/age/email; returns None when no row has this id."""
        try:
            with self.store.write() as session:
                stmt = update(PersonRow).where(PersonRow.id == id).values(name=name, age=age, email=email)
                session.execute(stmt)
        except IntegrityError as exc:
            logger.warning("Rejected person update %s: %s", id, exc.orig)
            raise ConstraintViolationError(f"Email {email} is already in use") from exc
        return self.get_by_id(id)

    def delete(self, id: str) -> None:
        with self.store.write() as session:
            session.execute(delete(PersonRow).where(PersonRow.id == id))


class RoleRepository:
    """CRUD helpers for the roles table."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def get_all_roles(self) -> list[Role]:
        with self.store.session() as session:
            rows = session.execute(select(RoleRow).order_by(RoleRow.role_name)).scalars().all()
            return [Role.from_entity(row) for row in rows]

    def search_roles(self, query: str) -> list[Role]:
        with self.store.session() as session:
            stmt = select(RoleRow).where(RoleRow.role_name.like(_like(query))).order_by(RoleRow.role_name)
            return [Role.from_entity(row) for row in session.execute(stmt).scalars().all()]

    def get_role_by_id(self, role_id: str) -> Optional[Role]:
        with self.store.session() as session:
            row = session.get(RoleRow, role_id)
            return Role.from_entity(row) if row else None

    def get_role_by_name(self, role_name: str) -> Optional[Role]:
        with self.store.session() as session:
            stmt = select(RoleRow).where(RoleRow.role_name == role_name)
            row = session.execute(stmt).scalar_one_or_none()
            return Role.from_entity(row) if row else None

    def count(self) -> int:
        with self.store.session() as session:
            return int(session.execute(select(func.count()).select_from(RoleRow)).scalar_one())

    def insert_role(self, role_id: str, role_name: str) -> Role:
        try:
            with self.store.write() as session:
                session.add(RoleRow(role_id=role_id, role_name=role_name))
        except IntegrityError as exc:
            logger.warning("Rejected role insert %s: %s", role_id, exc.orig)
            raise ConstraintViolationError(f"Role {role_name} conflicts with an existing record") from exc
        return self.get_role_by_id(role_id)

    def update_role(self, role_id: str, role_name: str) -> Optional[Role]:
        try:
            with self.store.write() as session:
                stmt = update(RoleRow).where(RoleRow.role_id == role_id).values(role_name=role_name)
                session.execute(stmt)
        except IntegrityError as exc:
            logger.warning("Rejected role update %s: %s", role_id, exc.orig)
            raise ConstraintViolationError(f"Role name {role_name} is already in use") from exc
        return self.get_role_by_id(role_id)

    def delete_role(self, role_id: str) -> None:
        with self.store.write() as session:
            session.execute(delete(RoleRow).where(RoleRow.role_id == role_id))


class UserRoleRepository:
    """Read and replace the role set held by each person."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def get_user_roles(self, user_id: str) -> list[Role]:
        with self.store.session() as session:
            stmt = (
                select(RoleRow)
                .join(UserRole, RoleRow.role_id == UserRole.role_id)
                .where(UserRole.user_id == user_id)
                .order_by(RoleRow.role_name)
            )
            return [Role.from_entity(row) for row in session.execute(stmt).scalars().all()]

    def set_roles_for_user(self, user_id: str, role_ids: Iterable[str]) -> None:
        """Replace every assignment of ``user_id`` in one transaction.

        Duplicate ids hit the composite primary key and abort the whole
        replacement; the previous set stays in place.
        """
        role_ids = list(role_ids)
        try:
            with self.store.write() as session:
                session.execute(delete(UserRole).where(UserRole.user_id == user_id))
                for role_id in role_ids:
                    session.execute(insert(UserRole).values(user_id=user_id, role_id=role_id))
        except SQLAlchemyError as exc:
            logger.warning("Rolled back role assignment for %s: %s", user_id, exc)
            raise RoleAssignmentError(f"Failed to set roles for user {user_id}") from exc
