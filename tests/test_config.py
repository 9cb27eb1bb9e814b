"""
Tests for configuration loading and logging setup.
"""

import pytest
import yaml
from loguru import logger

from iupacgraph import config
from iupacgraph.config import ConfigManager, configure_logging, get_settings
from iupacgraph.parser import parse
from iupacgraph.scanner import normalize


class TestConfigManager:
    """Defaults and YAML overrides."""

    def test_defaults(self):
        manager = ConfigManager()
        assert manager.get("logging", "level") == "WARNING"
        assert manager.get("render", "size") == [600, 400]
        assert manager.get("pubchem", "min_request_interval") == 0.25

    def test_defaults_are_copied(self):
        manager = ConfigManager()
        manager.get("scanner", "stereo_prefixes").append("(X)-")
        assert "(X)-" not in ConfigManager().get("scanner", "stereo_prefixes")

    def test_merge_with_defaults(self, config_file):
        path = config_file("logging:\n  level: DEBUG\n")
        manager = ConfigManager(path)
        assert manager.get("logging", "level") == "DEBUG"
        assert manager.get("render", "filename") == "compound.png"

    def test_empty_file_uses_defaults(self, config_file):
        manager = ConfigManager(config_file(""))
        assert manager.config == ConfigManager.DEFAULT_CONFIG

    def test_missing_file_uses_defaults(self, tmp_path):
        manager = ConfigManager(tmp_path / "nope.yaml")
        assert manager.get("logging", "level") == "WARNING"

    def test_invalid_yaml(self, config_file):
        with pytest.raises(yaml.YAMLError):
            ConfigManager(config_file("logging: [unclosed\n"))

    def test_unknown_key(self):
        with pytest.raises(KeyError):
            ConfigManager().get("logging", "colour")

    def test_set(self):
        manager = ConfigManager()
        manager.set("render", "filename", "out.png")
        assert manager.get("render", "filename") == "out.png"


class TestSettings:
    """Process-wide settings from the environment."""

    def test_env_var(self, monkeypatch, config_file):
        path = config_file("scanner:\n  stereo_prefixes: ['(X)-']\n")
        monkeypatch.setenv(config.CONFIG_ENV_VAR, str(path))
        get_settings.cache_clear()

        assert get_settings().get("scanner", "stereo_prefixes") == ["(X)-"]
        assert normalize("(X)-Butane") == "butane"
        assert normalize("(RS)-Butane") == "(RS)-butane"

    def test_cached(self):
        assert get_settings() is get_settings()


class TestLogging:
    """Loguru setup."""

    def test_configure_logging_enables_package(self, capsys):
        configure_logging("DEBUG")
        try:
            parse("Butane")
            assert "Parsed 'Butane'" in capsys.readouterr().err
        finally:
            logger.remove()
            logger.disable("iupacgraph")
