from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the persons_api package importable when running from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from persons_api.core import config as core_config  # noqa: E402
from persons_api.db.session import Store  # noqa: E402


@pytest.fixture()
def db_path(tmp_path) -> Path:
    return tmp_path / "persons.db"


@pytest.fixture()
def store(db_path):
    """A freshly loaded store backed by a temporary image file."""
    st = Store(db_path).load()
    yield st
    st.close()


@pytest.fixture()
def settings_env(db_path, monkeypatch):
    """Point the settings at a temporary image and reset the settings cache."""
    monkeypatch.setenv("DATABASE_PATH", str(db_path))
    monkeypatch.delenv("API_PREFIX", raising=False)
    monkeypatch.delenv("SEED_DATA", raising=False)
    core_config.get_settings.cache_clear()
    yield db_path
    core_config.get_settings.cache_clear()
