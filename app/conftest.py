"""
Root pytest configuration for the Django project.

This module configures pytest-django and provides project-wide fixtures.
App-specific fixtures are defined in each app's tests/conftest.py.
"""

import os

import django
import pytest

# Ensure Django settings are configured before any tests run
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")


def pytest_configure():
    """Configure Django settings before tests run."""
    django.setup()


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_templatetags.py → integration (renders through the template engine)
    - test_rendering.py, test_limits.py, test_adapters.py, etc. → unit
    - Unmatched files → unit

    Explicit markers on test functions/classes take precedence.
    """
    integration_patterns = [
        "test_templatetags.py",
    ]

    for item in items:
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration", "e2e"}:
            continue

        filename = str(item.fspath).split("/")[-1]

        if any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def reset_adapters():
    """Drop the cached adapter set so settings overrides take effect."""
    from toolkit.adapters import get_adapters

    get_adapters.cache_clear()
    yield
    get_adapters.cache_clear()
