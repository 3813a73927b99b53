"""
Tests for configuration settings
"""

import warnings

import pytest
from pydantic import ValidationError

from roles_privileges.settings import Settings


class TestSettings:
    """Test settings defaults, environment and validation"""

    def test_defaults(self):
        settings = Settings()

        assert settings.enable
        assert not settings.disabled
        assert settings.seed_super_admin
        assert settings.locales == ["en", "fr"]
        assert settings.default_locale == "en"
        assert settings.roles_field_name == "roles"
        assert "payload-preferences" in settings.internal_slugs

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("ROLES_PRIVILEGES_DISABLED", "true")
        monkeypatch.setenv("ROLES_PRIVILEGES_EXCLUDE_COLLECTIONS", '["media"]')

        settings = Settings()

        assert settings.disabled
        assert settings.exclude_collections == ["media"]

    def test_unknown_setting_rejected(self):
        with pytest.raises(ValidationError):
            Settings(wrap_everything=True)

    def test_valid_configuration(self):
        settings = Settings()
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            settings.validate_configuration()

    def test_default_locale_must_be_configured(self):
        with pytest.raises(ValueError):
            Settings(locales=["fr"], default_locale="en").validate_configuration()

    def test_locales_required(self):
        with pytest.raises(ValueError):
            Settings(locales=[]).validate_configuration()

    def test_locale_without_translations_warns(self):
        settings = Settings(locales=["en", "de"])
        with pytest.warns(UserWarning, match="'de'"):
            settings.validate_configuration()

    def test_overlapping_exclusions_warn(self):
        settings = Settings(exclude_collections=["config"], exclude_singletons=["config"])
        with pytest.warns(UserWarning, match="config"):
            settings.validate_configuration()
