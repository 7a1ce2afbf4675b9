#!/usr/bin/env python3
"""
Add a person directly to the database image.

Usage:
  python scripts/add_person.py --name "Dana Cruz" --age 40 --email dana@x.com [--role user --role admin]
"""
from __future__ import annotations

import argparse
import sys
from typing import Sequence

from persons_api.core.config import get_settings
from persons_api.core.ids import generate_id
from persons_api.core.logging_config import configure_logging
from persons_api.db.session import Store
from persons_api.repositories.errors import RepositoryError
from persons_api.repositories.sql_repository import (
    PersonRepository,
    RoleRepository,
    UserRoleRepository,
)
from persons_api.services.directory_service import MAX_AGE, MIN_AGE


def age_value(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid age: {text!r}")
    if not MIN_AGE <= value <= MAX_AGE:
        raise argparse.ArgumentTypeError(f"age out of range: {text}")
    return value


def main(argv: Sequence[str] | None = None) -> str:
    ap = argparse.ArgumentParser(description="Add a person to the directory")
    ap.add_argument("--name", required=True, help="Full name")
    ap.add_argument("--age", required=True, type=age_value, help="Age in years")
    ap.add_argument("--email", required=True, help="Unique email address")
    ap.add_argument("--role", action="append", default=[], help="Role name to assign (repeatable)")
    ap.add_argument("--database", help="Path to the database image (default: DATABASE_PATH)")
    args = ap.parse_args(argv)

    name = (args.name or "").strip()
    email = (args.email or "").strip()
    if not name or not email:
        raise SystemExit("name and email must not be blank")

    settings = get_settings()
    configure_logging(settings.log_level)
    store = Store(args.database or settings.database_path).load()
    try:
        roles = RoleRepository(store)
        role_ids = []
        for role_name in dict.fromkeys(args.role):
            role = roles.get_role_by_name(role_name)
            if role is None:
                raise SystemExit(f"Role '{role_name}' does not exist")
            role_ids.append(role.role_id)

        person = PersonRepository(store).insert(generate_id(), name, args.age, email)
        if role_ids:
            UserRoleRepository(store).set_roles_for_user(person.id, role_ids)
    finally:
        store.close()

    print("OK: person added")
    print(f"  ID: {person.id}")
    if role_ids:
        print(f"  Roles: {', '.join(dict.fromkeys(args.role))}")
    return person.id


if __name__ == "__main__":
    try:
        main()
    except RepositoryError as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
