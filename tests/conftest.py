"""
Shared pytest fixtures and configuration for eru tests.

This module provides:
- Settings cache reset so env overrides take effect per test
- structlog reset so configure_logging() does not leak between tests
- A sample value/rule set used by the validation tests
"""

import sys
from pathlib import Path
from typing import Any

import pytest
import structlog

# Ensure eru package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from eru.core.errors import ValidationError, error_from_message
from eru.core.settings import get_settings


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark hypothesis tests as property tests, everything else as unit."""
    for item in items:
        if getattr(item.obj, "is_hypothesis_test", False):
            item.add_marker(pytest.mark.property)
        else:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings():
    """Drop cached settings before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_structlog():
    """Restore structlog defaults after each test."""
    yield
    structlog.reset_defaults()


# =============================================================================
# Sample Data
# =============================================================================


class Person:
    def __init__(self, age: int, name: str):
        self.age = age
        self.name = name


@pytest.fixture
def minor_without_name() -> Person:
    return Person(age=11, name="")


@pytest.fixture
def valid_adult() -> Person:
    return Person(age=30, name="Ada")


@pytest.fixture
def person_rules() -> list[tuple[Any, ValidationError]]:
    return [
        (lambda p: p.age >= 18, error_from_message("Must have a valid age")),
        (lambda p: p.name.strip() != "", error_from_message("Must have a name")),
    ]
