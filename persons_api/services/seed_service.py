"""First-run starter data: three roles and three people holding "user"."""

from __future__ import annotations

import logging

from sqlalchemy import func, insert, select

from persons_api.core.ids import generate_id
from persons_api.db.models import Person, Role, UserRole
from persons_api.db.session import Store

logger = logging.getLogger(__name__)

SEED_ROLES = ("guest", "user", "admin")
SEED_PEOPLE = (
    {"name": "Alice Johnson", "age": 29, "email": "alice@example.com"},
    {"name": "Ben Thompson", "age": 34, "email": "ben.t@example.com"},
    {"name": "Carla Mendez", "age": 22, "email": "carla.m@example.com"},
)
DEFAULT_ROLE = "user"


def seed_database(store: Store) -> bool:
    """Fill empty tables; returns True when anything was inserted.

    Roles and people are checked separately, so a store that already has
    roles only gets the people (assigned the existing "user" role).
    """
    seeded = False
    with store.write() as session:
        role_count = session.execute(select(func.count()).select_from(Role)).scalar_one()
        if role_count == 0:
            for role_name in SEED_ROLES:
                session.execute(insert(Role).values(role_id=generate_id(), role_name=role_name))
            logger.info("Roles table initialized with %d roles", len(SEED_ROLES))
            seeded = True

        people_count = session.execute(select(func.count()).select_from(Person)).scalar_one()
        if people_count == 0:
            default_role_id = session.execute(
                select(Role.role_id).where(Role.role_name == DEFAULT_ROLE)
            ).scalar_one_or_none()
            for person in SEED_PEOPLE:
                person_id = generate_id()
                session.execute(insert(Person).values(id=person_id, **person))
                if default_role_id:
                    session.execute(insert(UserRole).values(user_id=person_id, role_id=default_role_id))
            logger.info("People table initialized with %d people", len(SEED_PEOPLE))
            seeded = True
    return seeded
