"""Database helpers (store/session export)."""

from .session import Base, Store, StoreCorruptError

__all__ = ["Base", "Store", "StoreCorruptError"]
