"""Utility script to create the initial database image."""
from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .session import Base
from . import models  # noqa: F401  # ensure models are imported for metadata


def create_all(engine: Engine) -> None:
    """Create any missing table; existing tables and rows are left alone."""
    Base.metadata.create_all(bind=engine)


if __name__ == "__main__":
    from persons_api.core.config import get_settings
    from .session import Store, StoreCorruptError

    try:
        store = Store(get_settings().database_path).load()
        store.close()
        print(f"Database image ready at {store.path}")
    except (SQLAlchemyError, StoreCorruptError) as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
