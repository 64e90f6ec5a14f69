"""Pytest configuration for all tests."""

import pytest

from crudmeta.core.config import get_settings
from crudmeta.core.context import clear_current_login_name
from crudmeta.domain.services.property_path_cache import get_property_path_cache


@pytest.fixture(autouse=True)
def _reset_process_state():
    """Give every test fresh settings, an empty path cache and no login."""
    get_settings.cache_clear()
    get_property_path_cache().clear()
    clear_current_login_name()
    yield
    get_settings.cache_clear()
    get_property_path_cache().clear()
    clear_current_login_name()
