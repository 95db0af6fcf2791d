"""Tests for config/settings.py."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from config.settings import Settings, get_settings, refresh_settings


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self):
        """Test default setting values."""
        settings = Settings()

        assert settings.lessons_collection == "lessons"
        assert settings.configs_collection == "configs"
        assert settings.config_document_id == "configs_id"
        assert settings.sync_batch_size == 500
        assert settings.emulator_host == "localhost:6333"
        assert settings.app_name == "tpadmin"
        assert settings.lessons_file_path == "./data/lessons.txt"
        assert settings.words_file_path == "./data/words.txt"
        assert settings.use_emulator is False

    def test_store_not_configured_by_default(self):
        """Test store is not configured without URL or emulator."""
        assert not Settings().is_store_configured()

    def test_emulator_needs_no_credentials(self):
        """Test emulator mode counts as configured and uses local URL."""
        with patch.dict(os.environ, {"USE_EMULATOR": "true", "EMULATOR_HOST": "127.0.0.1:7000"}):
            refresh_settings()
            settings = get_settings()

            assert settings.is_store_configured()
            assert settings.store_url() == "http://127.0.0.1:7000"

    def test_with_env_vars(self, mock_env_vars):
        """Test settings load from environment variables."""
        settings = get_settings()

        assert settings.qdrant_url == "https://store.example.test:6333"
        assert settings.qdrant_api_key == "test_qdrant_key_12345"
        assert settings.sync_batch_size == 2
        assert settings.is_store_configured()
        assert settings.store_url() == "https://store.example.test:6333"

    def test_collection_name_namespaced_by_project(self, mock_env_vars):
        """Test project id prefixes collection names."""
        assert get_settings().collection_name("lessons") == "typingchild_lessons"

    def test_collection_name_without_project(self):
        """Test collection names are unchanged without a project id."""
        assert Settings().collection_name("lessons") == "lessons"

    def test_whitespace_stripping(self):
        """Test credentials have whitespace stripped."""
        with patch.dict(os.environ, {"QDRANT_API_KEY": "  key_with_spaces  "}):
            refresh_settings()
            settings = get_settings()
            assert settings.qdrant_api_key == "key_with_spaces"

    def test_batch_size_bounds(self):
        """Test batch size outside bounds is rejected."""
        with patch.dict(os.environ, {"SYNC_BATCH_SIZE": "0"}):
            with pytest.raises(ValidationError):
                Settings()


class TestGetSettings:
    """Tests for get_settings function."""

    def test_caching(self, mock_env_vars):
        """Test settings are cached."""
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2

    def test_refresh_clears_cache(self, mock_env_vars):
        """Test refresh_settings clears the cache."""
        settings1 = get_settings()
        refresh_settings()
        settings2 = get_settings()
        assert settings1 is not settings2
