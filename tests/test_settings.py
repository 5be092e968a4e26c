"""DslSettings tests: environment overrides and validation."""

import pytest
from pydantic import ValidationError

from searchdsl.config.runtime import DslSettings, get_settings


class TestDefaults:
    def test_defaults(self):
        settings = get_settings()
        assert settings.strict_shapes is True
        assert settings.filter_only_query == "drop"
        assert settings.default_index == "_all"
        assert settings.max_size == 10_000

    def test_singleton(self):
        assert get_settings() is get_settings()


class TestEnvironment:
    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SEARCHDSL_FILTER_ONLY_QUERY", "error")
        monkeypatch.setenv("SEARCHDSL_DEFAULT_INDEX", " events ")
        settings = DslSettings()
        assert settings.filter_only_query == "error"
        assert settings.default_index == "events"

    def test_invalid_policy(self, monkeypatch):
        monkeypatch.setenv("SEARCHDSL_FILTER_ONLY_QUERY", "ignore")
        with pytest.raises(ValidationError):
            DslSettings()


class TestValidation:
    def test_max_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            DslSettings(max_size=0)

    def test_blank_default_index(self):
        with pytest.raises(ValidationError):
            DslSettings(default_index="  ")
