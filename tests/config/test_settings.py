"""Tests for configuration and settings functionality."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from tmdb_api_kit.clients.tmdb import TmdbClient
from tmdb_api_kit.config.settings import (
    Settings,
    SettingsError,
    SettingsLoadResult,
    _collect_env_overrides,
    _determine_config_path,
    _flatten_toml,
    load_settings,
)


class TestSettings:
    """Test Settings model functionality."""

    def test_settings_default_values(self):
        settings = Settings()

        assert settings.bearer_token is None
        assert settings.language is None
        assert settings.region is None
        assert settings.timeout == 15.0

    def test_settings_with_aliases(self):
        """Test Settings model using environment variable aliases."""
        settings = Settings(
            TMDB_BEARER_TOKEN="token",
            TMDB_LANGUAGE="en-US",
            TMDB_REGION="US",
            TMDB_TIMEOUT=5,
        )

        assert settings.bearer_token == "token"
        assert settings.language == "en-US"
        assert settings.region == "US"
        assert settings.timeout == 5.0

    def test_settings_strip_whitespace(self):
        settings = Settings(bearer_token="  token  ")
        assert settings.bearer_token == "token"

    def test_require_token_missing(self):
        with pytest.raises(SettingsError, match="TMDB_BEARER_TOKEN"):
            Settings().require_token()

    def test_require_token_success(self):
        Settings(bearer_token="token").require_token()

    @pytest.mark.asyncio
    async def test_build_client_uses_defaults(self):
        client = Settings(bearer_token="token", language="it-IT", region="IT").build_client()

        assert isinstance(client, TmdbClient)
        assert client.default_language == "it-IT"
        assert client.default_region == "IT"
        await client.close()

    def test_build_client_without_token(self):
        with pytest.raises(SettingsError):
            Settings().build_client()


class TestConfigPath:
    def test_determine_config_path_explicit(self):
        explicit = Path("/explicit/config.toml")
        assert _determine_config_path(explicit) == explicit

    def test_determine_config_path_from_env(self):
        with patch.dict(os.environ, {"TMDB_API_KIT_CONFIG": "/env/config.toml"}):
            assert _determine_config_path(None) == Path("/env/config.toml").resolve()

    def test_determine_config_path_default_not_exists(self):
        with patch.dict(os.environ, {}, clear=True):
            with patch("pathlib.Path.exists", return_value=False):
                assert _determine_config_path(None) is None


class TestFlattenToml:
    def test_flatten_toml_empty(self):
        assert _flatten_toml({}) == {}

    def test_flatten_toml_tmdb_section(self):
        toml_data = {
            "tmdb": {
                "bearer_token": "toml-token",
                "language": "fr-FR",
                "region": "FR",
                "timeout": 30,
            }
        }

        result = _flatten_toml(toml_data)

        assert result == {
            "bearer_token": "toml-token",
            "language": "fr-FR",
            "region": "FR",
            "timeout": 30,
        }

    def test_flatten_toml_ignores_other_sections(self):
        assert _flatten_toml({"other": {"bearer_token": "x"}}) == {}


class TestEnvOverrides:
    def test_collect_env_overrides_empty(self):
        with patch.dict(os.environ, {}, clear=True):
            assert _collect_env_overrides() == {}

    def test_collect_env_overrides_values(self):
        env_vars = {
            "TMDB_BEARER_TOKEN": "env-token",
            "TMDB_LANGUAGE": "de-DE",
            "TMDB_REGION": "DE",
            "TMDB_TIMEOUT": "7.5",
        }
        with patch.dict(os.environ, env_vars, clear=True):
            result = _collect_env_overrides()

        assert result == {
            "bearer_token": "env-token",
            "language": "de-DE",
            "region": "DE",
            "timeout": 7.5,
        }

    def test_collect_env_overrides_bad_timeout(self):
        with patch.dict(os.environ, {"TMDB_TIMEOUT": "soon"}, clear=True):
            with pytest.raises(SettingsError):
                _collect_env_overrides()


class TestLoadSettings:
    def test_env_overrides_toml(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text(
            '[tmdb]\nbearer_token = "toml-token"\nlanguage = "fr-FR"\n',
            encoding="utf-8",
        )

        with patch.dict(os.environ, {"TMDB_LANGUAGE": "es-ES"}, clear=True):
            result = load_settings(config_file, load_env=False)

        assert isinstance(result, SettingsLoadResult)
        assert result.source_path == config_file
        assert result.settings.bearer_token == "toml-token"
        assert result.settings.language == "es-ES"

    def test_missing_config_file_uses_env_only(self, tmp_path):
        with patch.dict(os.environ, {"TMDB_BEARER_TOKEN": "env-token"}, clear=True):
            result = load_settings(tmp_path / "missing.toml", load_env=False)

        assert result.settings.bearer_token == "env-token"

    def test_invalid_timeout_raises_settings_error(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("[tmdb]\ntimeout = -1\n", encoding="utf-8")

        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(SettingsError):
                load_settings(config_file, load_env=False)

    def test_non_numeric_toml_timeout_raises_settings_error(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text('[tmdb]\ntimeout = "soon"\n', encoding="utf-8")

        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(SettingsError):
                load_settings(config_file, load_env=False)
