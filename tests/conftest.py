"""Pytest configuration for shared test markers and locale isolation."""

import locale

import pytest


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "integration: exercises several organizer stages against a store.",
    )


@pytest.fixture(autouse=True)
def _c_collation():
    """Keep LC_COLLATE at "C" so ordering assertions do not depend on the host."""
    previous = locale.setlocale(locale.LC_COLLATE)
    locale.setlocale(locale.LC_COLLATE, "C")
    yield
    locale.setlocale(locale.LC_COLLATE, previous)
