"""SQLAlchemy models for the people / roles / user_roles tables."""
from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, Text

from .session import Base


class Person(Base):
    __tablename__ = "people"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    age = Column(Integer, nullable=False)
    email = Column(Text, nullable=False, unique=True)


class Role(Base):
    __tablename__ = "roles"

    role_id = Column(Text, primary_key=True)
    role_name = Column(Text, nullable=False, unique=True)


class UserRole(Base):
    """One row per (person, role) pair.

    The foreign keys document the relationship only: SQLite leaves them
    unenforced, so deleting a person or role keeps its assignment rows.
    """

    __tablename__ = "user_roles"

    user_id = Column(Text, ForeignKey("people.id"), primary_key=True)
    role_id = Column(Text, ForeignKey("roles.role_id"), primary_key=True)
