"""Pytest configuration for integration tests."""

from pathlib import Path

import pytest

INTEGRATION_DIR = Path(__file__).parent


def pytest_collection_modifyitems(items):
    """Tag end-to-end tests so `-m "not integration"` can skip them."""
    for item in items:
        if INTEGRATION_DIR in Path(item.path).parents:
            item.add_marker(pytest.mark.integration)
