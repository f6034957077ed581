"""Tests for environment configuration."""

import logging
import os

import pytest
from pydantic import ValidationError

from scenelayout import config as config_module
from scenelayout.config import LOG_FORMAT, Settings, configure_logging, get_settings
from scenelayout.engine.layout_engine import LayoutEngine


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; start every test fresh."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch) -> None:
        """Test defaults when nothing is configured."""
        for name in config_module.LAYOUT_ENV_VARS:
            monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv("LAYOUT_STRICT_VALIDATION", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        settings = Settings()
        assert settings.strict_validation
        assert settings.log_level == "INFO"
        assert settings.layout_overrides == {}
        assert settings.layout_config().canvas_width == 1920

    def test_layout_variables(self, monkeypatch) -> None:
        """Test LAYOUT_* variables become explicitly set config fields."""
        for name in config_module.LAYOUT_ENV_VARS:
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("LAYOUT_CANVAS_WIDTH", "1280")
        monkeypatch.setenv("LAYOUT_NODE_SEPARATION", "12.5")

        layout_config = get_settings().layout_config()
        assert layout_config.canvas_width == 1280
        assert layout_config.node_separation == 12.5
        assert layout_config.model_fields_set == {"canvas_width", "node_separation"}

    def test_invalid_value_rejected(self, monkeypatch) -> None:
        """Test invalid values fail config validation."""
        monkeypatch.setenv("LAYOUT_NODE_WIDTH", "0")
        with pytest.raises(ValidationError):
            Settings().layout_config()

    def test_permissive_mode(self, monkeypatch) -> None:
        """Test LAYOUT_STRICT_VALIDATION=false selects permissive mode."""
        monkeypatch.setenv("LAYOUT_STRICT_VALIDATION", "false")
        assert not Settings().strict_validation

    def test_cached(self) -> None:
        """Test get_settings returns one shared instance."""
        assert get_settings() is get_settings()

    def test_engine_from_settings(self, monkeypatch) -> None:
        """Test the engine picks up environment settings."""
        for name in config_module.LAYOUT_ENV_VARS:
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("LAYOUT_CANVAS_HEIGHT", "720")
        monkeypatch.setenv("LAYOUT_STRICT_VALIDATION", "false")

        engine = LayoutEngine.from_settings()
        assert engine.config.canvas_height == 720
        assert not engine.strict_validation


class TestDotenv:
    """Tests for .env loading."""

    def test_loads_missing_variables_only(self, monkeypatch, tmp_path) -> None:
        """Test .env values never override the real environment."""
        # Register both variables with monkeypatch so they are removed afterwards
        monkeypatch.setenv("LAYOUT_PADDING", "0")
        monkeypatch.delenv("LAYOUT_PADDING")
        monkeypatch.setenv("LOG_LEVEL", "WARNING")

        env_file = tmp_path / ".env"
        env_file.write_text("# layout\nLAYOUT_PADDING=30\nLOG_LEVEL=DEBUG\n\nBROKEN LINE\n")
        config_module._load_dotenv(env_file)

        assert os.environ["LAYOUT_PADDING"] == "30"
        assert os.environ["LOG_LEVEL"] == "WARNING"

    def test_missing_file_is_ignored(self, tmp_path) -> None:
        """Test a missing .env file is not an error."""
        config_module._load_dotenv(tmp_path / "absent.env")


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_level_and_format(self, monkeypatch) -> None:
        """Test the requested level and the standard format are used."""
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        configure_logging("debug")
        assert calls == [{"level": logging.DEBUG, "format": LOG_FORMAT}]

    def test_unknown_level_falls_back_to_info(self, monkeypatch) -> None:
        """Test an unknown level name still configures logging."""
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        configure_logging("chatty")
        assert calls[0]["level"] == logging.INFO
