import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from crudmeta.core.config import Settings, get_settings


def test_settings_defaults():
    """Test that settings load with correct defaults."""
    settings = Settings()

    assert settings.app_name == "crudmeta"
    assert settings.environment == "development"
    assert settings.debug is False
    assert settings.database_url.startswith("sqlite+aiosqlite:///")
    assert settings.system_user_name == "system"
    assert settings.is_development is True
    assert settings.is_production is False
    assert settings.is_testing is False


def test_settings_env_override():
    """Test that environment variables override defaults."""
    with patch.dict(os.environ, {
        "CRUDMETA_ENVIRONMENT": "production",
        "CRUDMETA_DEBUG": "true",
        "CRUDMETA_LOG_FORMAT": "console",
        "CRUDMETA_SYSTEM_USER_NAME": "batch",
    }):
        settings = Settings()

        assert settings.environment == "production"
        assert settings.debug is True
        assert settings.log_format == "console"
        assert settings.system_user_name == "batch"
        assert settings.is_production is True


def test_system_user_name_is_stripped():
    """Surrounding whitespace is removed from the system user name."""
    settings = Settings(system_user_name="  batch  ")
    assert settings.system_user_name == "batch"


def test_blank_system_user_name_rejected():
    """A blank system user name fails validation."""
    with pytest.raises(ValidationError):
        Settings(system_user_name="   ")


def test_invalid_environment_rejected():
    with pytest.raises(ValidationError):
        Settings(environment="staging")


def test_get_settings_is_cached():
    """get_settings returns the same instance until the cache is cleared."""
    first = get_settings()
    assert get_settings() is first

    get_settings.cache_clear()
    assert get_settings() is not first
