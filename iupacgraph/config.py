"""
Configuration for iupacgraph.

Settings live in an optional YAML file (path in the IUPACGRAPH_CONFIG
environment variable) and are merged over DEFAULT_CONFIG, so a file only
needs the keys it changes.
"""

import copy
import os
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml
from loguru import logger

CONFIG_ENV_VAR = "IUPACGRAPH_CONFIG"


class ConfigManager:
    """Holds the merged configuration dictionary."""

    DEFAULT_CONFIG = {
        "logging": {
            "level": "WARNING",
        },
        "scanner": {
            "stereo_prefixes": ["(RS)-", "(R)-", "(S)-", "(E)-", "(Z)-"],
        },
        "render": {
            "filename": "compound.png",
            "size": [600, 400],
        },
        "pubchem": {
            "base_url": "https://pubchem.ncbi.nlm.nih.gov/rest/pug",
            "timeout": 15,
            "min_request_interval": 0.25,
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path
        self.config: dict[str, Any] = {}

        if config_path and Path(config_path).exists():
            self.load_config(Path(config_path))
        else:
            if config_path:
                logger.info(f"No config file at {config_path}, using defaults")
            self.config = copy.deepcopy(self.DEFAULT_CONFIG)

    def load_config(self, path: Path) -> dict[str, Any]:
        """
        Load configuration from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist
            yaml.YAMLError: If the file is not valid YAML
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise

        if not loaded:
            logger.warning(f"Empty config file at {path}, using defaults")
            self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        else:
            self.config = self._merge_with_defaults(loaded)

        self.config_path = path
        logger.info(f"Loaded configuration from {path}")
        return self.config

    def get(self, section: str, key: str) -> Any:
        try:
            return self.config[section][key]
        except KeyError:
            raise KeyError(f"Unknown configuration key: {section}.{key}") from None

    def set(self, section: str, key: str, value: Any):
        self.config.setdefault(section, {})[key] = value

    def _merge_with_defaults(self, loaded: dict) -> dict:
        merged = copy.deepcopy(self.DEFAULT_CONFIG)
        for section, values in loaded.items():
            if isinstance(values, dict) and isinstance(merged.get(section), dict):
                merged[section].update(values)
            else:
                merged[section] = values
        return merged


@lru_cache(maxsize=1)
def get_settings() -> ConfigManager:
    path = os.environ.get(CONFIG_ENV_VAR)
    return ConfigManager(Path(path) if path else None)


def configure_logging(level: Optional[str] = None):
    """Send iupacgraph's log records to stderr at `level`."""
    level = level or get_settings().get("logging", "level")
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format="<level>{level: <8}</level> | {name}:{line} - {message}")
    logger.enable("iupacgraph")
