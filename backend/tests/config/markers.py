"""
Pytest markers and collection hooks for the barbershop tests.

Markers are added from the test file location so suites can be selected
with ``-m unit``, ``-m scheduling``, ``-m controllers`` and so on.
"""

from pathlib import Path

import pytest

MARKERS = {
    "unit": "fast tests without a database",
    "integration": "tests against in-memory SQLite or the Flask client",
    "database": "tests that create tables",
    "scheduling": "calendar, occupancy, slot and recurrence engine",
    "services": "application service layer",
    "repositories": "SQLAlchemy repositories",
    "controllers": "HTTP blueprints",
    "appointment": "appointment booking and lifecycle",
}

SCHEDULING_MODULES = ("slot", "recurrence", "occupancy", "operating_calendar")


def pytest_configure(config):
    for name, description in MARKERS.items():
        config.addinivalue_line("markers", f"{name}: {description}")


def _markers_for(path: Path, test_name: str):
    folders = set(path.parent.parts)
    module = path.stem

    if "unit" in folders:
        yield "unit"
    if "integration" in folders:
        yield "integration"
        yield "database"
    if any(key in module for key in SCHEDULING_MODULES):
        yield "scheduling"
    if "controller" in module:
        yield "controllers"
    if "service" in module:
        yield "services"
    if "repositor" in module:
        yield "repositories"
    if "appointment" in module or "appointment" in test_name:
        yield "appointment"


def pytest_collection_modifyitems(config, items):
    """Mark collected tests by folder and module name."""
    for item in items:
        for name in _markers_for(Path(item.path), item.name):
            item.add_marker(getattr(pytest.mark, name))
