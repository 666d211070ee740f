"""Pytest configuration and shared fixtures for Settings Pages tests.

Provides an in-memory options repository, a throwaway SQLite engine and
helpers that reset the process-wide filter and page registries between tests.
"""

from __future__ import annotations

import copy
import tempfile
from pathlib import Path
from typing import Any, Mapping, Optional

import pytest
from sqlmodel import SQLModel

from settingspages import hooks
from settingspages.errors import OptionsStorageError
from settingspages.extensions import init_engine, reset_engine
from settingspages.fields import build_default_registry
from settingspages.options import OptionsStore
from settingspages.pages import SettingsPage, build_page, clear_pages


class InMemoryOptionsRepository:
    """Dictionary-backed stand-in for the SQLModel repository."""

    def __init__(self, initial: Optional[dict[str, dict[str, Any]]] = None) -> None:
        self.data: dict[str, dict[str, Any]] = copy.deepcopy(initial or {})
        self.writes = 0
        self.fail_writes = False
        self.fail_reads = False

    def get(self, name: str, default: Optional[Mapping[str, Any]] = None) -> Any:
        if self.fail_reads:
            raise OptionsStorageError(f"cannot read {name}")
        if name not in self.data:
            return copy.deepcopy(default)
        return copy.deepcopy(self.data[name])

    def put(self, name: str, value: Mapping[str, Any]) -> bool:
        if self.fail_writes:
            return False
        self.writes += 1
        self.data[name] = copy.deepcopy(dict(value))
        return True

    def delete(self, name: str) -> bool:
        return self.data.pop(name, None) is not None


# =============================================================================
# Registry isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_registries():
    """Start and finish every test with no filters and no pages registered."""

    hooks.clear_filters()
    clear_pages()
    yield
    hooks.clear_filters()
    clear_pages()


@pytest.fixture
def registry():
    """A fresh field type registry with the built-in types."""

    return build_default_registry()


# =============================================================================
# Storage fixtures
# =============================================================================


@pytest.fixture
def memory_repository() -> InMemoryOptionsRepository:
    return InMemoryOptionsRepository()


@pytest.fixture
def store_factory(memory_repository):
    """Build option stores backed by the shared in-memory repository."""

    def _create_store(name: str = "test_options", initial: Optional[dict[str, Any]] = None) -> OptionsStore:
        if initial is not None:
            memory_repository.data[name] = copy.deepcopy(initial)
        return OptionsStore(name, {}, repository=memory_repository)

    return _create_store


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file and bind the package engine to it.

    Yields:
        Engine: SQLModel engine connected to the test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = init_engine(f"sqlite:///{db_path}", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)

    yield engine

    reset_engine()
    db_path.unlink(missing_ok=True)


# =============================================================================
# Page fixtures
# =============================================================================


@pytest.fixture
def settings_page() -> SettingsPage:
    page = build_page(
        "test-options",
        {"page": "Test Options", "menu": "Test", "options": "test-options", "position": 70},
    )
    assert page is not None
    return page
