"""
CLI Configuration utilities

Loads CLI defaults from .libforge.yaml
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILE = ".libforge.yaml"


class CLIConfig:
    """
    Manages CLI configuration from .libforge.yaml files.

    Configuration is loaded in this order (last wins):
    1. Built-in defaults
    2. User home directory config (~/.libforge.yaml)
    3. Current directory config (./.libforge.yaml)
    """

    DEFAULT_CONFIG = {
        "build": {
            "workspace": ".",
            "with_deps": False,
            "source_map": False,
            "verbose": False
        }
    }

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize CLI config.

        Args:
            config_file: Optional path to config file. If None, searches standard locations.
        """
        self.config: Dict[str, Any] = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file:
            self.load_from_file(config_file)
        else:
            self.load_standard_configs()

    def load_standard_configs(self):
        """Load config from standard locations in order."""
        home_config = Path.home() / CONFIG_FILE
        if home_config.exists():
            self.load_from_file(str(home_config))

        local_config = Path.cwd() / CONFIG_FILE
        if local_config.exists():
            self.load_from_file(str(local_config))

    def load_from_file(self, config_file: str):
        """
        Load configuration from a YAML file.

        Missing or malformed files are skipped with a warning; the defaults
        stay in effect.

        Args:
            config_file: Path to config file
        """
        try:
            with open(config_file, 'r') as f:
                loaded_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Ignoring config file %s: %s", config_file, e)
            return

        if not isinstance(loaded_config, dict):
            logger.warning("Ignoring config file %s: expected a mapping", config_file)
            return
        self._merge_config(loaded_config)

    def _merge_config(self, new_config: Dict[str, Any]):
        """Recursively merge new config into existing config."""
        for key, value in new_config.items():
            if key in self.config and isinstance(self.config[key], dict) and isinstance(value, dict):
                self.config[key].update(value)
            else:
                self.config[key] = value

    def get(self, command: str, option: str, default: Any = None) -> Any:
        """
        Get a config value for a command.

        Args:
            command: Command name (e.g., 'build')
            option: Option name (e.g., 'with_deps')
            default: Default value if not found

        Returns:
            Configuration value or default
        """
        if command in self.config:
            return self.config[command].get(option, default)
        return default


def load_cli_config(config_file: Optional[str] = None) -> CLIConfig:
    """
    Load CLI configuration.

    Args:
        config_file: Optional path to config file

    Returns:
        CLIConfig instance
    """
    return CLIConfig(config_file)
