"""Typed records built from table rows by column name."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Person:
    id: str
    name: str
    age: int
    email: str

    @classmethod
    def from_entity(cls, entity: Any) -> "Person":
        return cls(
            id=str(entity.id),
            name=str(entity.name),
            age=int(entity.age),
            email=str(entity.email),
        )

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Role:
    role_id: str
    role_name: str

    @classmethod
    def from_entity(cls, entity: Any) -> "Role":
        return cls(role_id=str(entity.role_id), role_name=str(entity.role_name))

    def as_dict(self) -> dict:
        return asdict(self)
