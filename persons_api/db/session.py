"""
Engine/session helpers for the SQLite-backed store.

The whole database lives in memory while the process runs. ``Store.load``
copies the durable image in at startup and ``Store.flush`` writes a full
replacement image back after every mutation, so a crash mid-flush leaves the
previous image intact.
"""
from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
import logging
import os
import sqlite3
import threading

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


class StoreCorruptError(RuntimeError):
    """The durable image exists but cannot be read as a database."""


class Store:
    """Owns the in-memory database and its durable image.

    One instance is created at startup and handed to every repository.
    Lifecycle: ``load()`` -> serve -> ``flush()`` after each write -> ``close()``.
    Every session is taken under a single re-entrant lock, so repository
    calls never interleave.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self._lock = threading.RLock()
        self._engine: Engine | None = None
        self._sessionmaker: sessionmaker | None = None

    # -------------------------- lifecycle --------------------------
    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Store is not open; call load() first.")
        return self._engine

    def load(self) -> "Store":
        from .create_tables import create_all

        engine = create_engine(
            "sqlite://",
            future=True,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        if self.path is not None and self.path.exists():
            try:
                self._copy_image_into(engine)
            except StoreCorruptError:
                engine.dispose()
                logger.error("Database image %s is unreadable", self.path)
                raise
            logger.info("Loaded database image from %s", self.path)
        else:
            logger.info("No database image at %s; starting empty", self.path)
        create_all(engine)
        self._engine = engine
        self._sessionmaker = sessionmaker(bind=engine, autoflush=False, future=True)
        return self

    def close(self) -> None:
        if self._engine is None:
            return
        with self._lock:
            self.flush()
            self._engine.dispose()
            self._engine = None
            self._sessionmaker = None

    # -------------------------- image I/O --------------------------
    def _copy_image_into(self, engine: Engine) -> None:
        raw = engine.raw_connection()
        try:
            memory = raw.driver_connection
            source = sqlite3.connect(str(self.path))
            try:
                source.backup(memory)
            finally:
                source.close()
            status = memory.execute("PRAGMA quick_check").fetchone()
        except sqlite3.DatabaseError as exc:
            raise StoreCorruptError(f"Cannot read database image {self.path}: {exc}") from exc
        finally:
            raw.close()
        if not status or status[0] != "ok":
            raise StoreCorruptError(f"Database image {self.path} failed integrity check: {status}")

    def flush(self) -> None:
        """Overwrite the durable image with the full in-memory database."""
        if self.path is None:
            return
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_name(self.path.name + ".tmp")
            if tmp.exists():
                tmp.unlink()
            raw = self.engine.raw_connection()
            try:
                target = sqlite3.connect(str(tmp))
                try:
                    raw.driver_connection.backup(target)
                finally:
                    target.close()
            finally:
                raw.close()
            os.replace(tmp, self.path)
            logger.debug("Flushed database image to %s", self.path)

    # -------------------------- sessions --------------------------
    @contextmanager
    def session(self) -> Iterator[Session]:
        """Read session; nothing is committed or flushed."""
        with self._lock:
            session: Session = self._new_session()
            try:
                yield session
            finally:
                session.close()

    @contextmanager
    def write(self) -> Iterator[Session]:
        """Single transaction: commit and flush on success, rollback on error."""
        with self._lock:
            session: Session = self._new_session()
            try:
                yield session
                session.commit()
            except BaseException:
                session.rollback()
                raise
            finally:
                session.close()
            self.flush()

    def _new_session(self) -> Session:
        if self._sessionmaker is None:
            raise RuntimeError("Store is not open; call load() first.")
        return self._sessionmaker()
