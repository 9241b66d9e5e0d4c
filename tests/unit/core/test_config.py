"""Unit tests for settings loading"""

import pytest

from cms.config import get_settings
from cms.main import create_app


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    def test_testing_environment_from_env(self, fresh_settings):
        settings = get_settings()

        assert settings.environment == "testing"
        assert settings.is_development is False

    @pytest.mark.parametrize("value,expected", [("true", True), ("false", False)])
    def test_debug_flag_reaches_app(self, fresh_settings, monkeypatch, value, expected):
        monkeypatch.setenv("CMS_DEBUG", value)

        app = create_app(use_lifespan=False)

        assert app.debug is expected
