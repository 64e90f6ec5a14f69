"""Tests for the current login name context."""

import os
from unittest.mock import patch

from crudmeta.core.config import get_settings
from crudmeta.core.context import (
    clear_current_login_name,
    get_current_login_name,
    set_current_login_name,
)


def test_falls_back_to_system_user_name():
    assert get_current_login_name() == "system"


def test_fallback_follows_configuration():
    with patch.dict(os.environ, {"CRUDMETA_SYSTEM_USER_NAME": "nightly-import"}):
        get_settings.cache_clear()
        assert get_current_login_name() == "nightly-import"


def test_bound_login_name_wins():
    set_current_login_name("jdoe")
    assert get_current_login_name() == "jdoe"

    clear_current_login_name()
    assert get_current_login_name() == "system"
