"""
Configuration loader for tracker overrides.

Allows users to tune the tracker via YAML configuration files.
"""

import yaml
import logging
from pathlib import Path
from typing import Dict, Optional, Any

from .settings import TrackerSettings, get_settings

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads and applies custom configuration from YAML files."""

    @staticmethod
    def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to custom config file. If None, looks for:
                        1. killtracker.yaml in current directory
                        2. config/killtracker.yaml
                        3. ~/.killtracker/killtracker.yaml

        Returns:
            Configuration dictionary
        """
        search_paths = [
            Path("killtracker.yaml"),
            Path("config/killtracker.yaml"),
            Path.home() / ".killtracker" / "killtracker.yaml",
        ]

        if config_path:
            search_paths.insert(0, Path(config_path))

        for path in search_paths:
            if path.exists():
                try:
                    with open(path, "r") as f:
                        config = yaml.safe_load(f) or {}
                except (OSError, yaml.YAMLError) as e:
                    logger.error(f"Failed to load config from {path}: {e}")
                    continue

                if not isinstance(config, dict):
                    logger.error(f"Ignoring config {path}: top level must be a mapping")
                    continue

                logger.info(f"Loaded configuration from {path}")
                return config

        logger.debug("No custom configuration file found, using defaults")
        return {}

    @staticmethod
    def apply_config(config: Dict[str, Any], target: Optional[TrackerSettings] = None) -> TrackerSettings:
        """
        Apply custom configuration to tracker settings.

        Args:
            config: Configuration dictionary from YAML
            target: Settings to update (defaults to the global settings)

        Returns:
            The updated settings
        """
        target = target or get_settings()

        # Allow both a flat mapping and a "tracker:" section
        section = config.get("tracker", config)
        if not isinstance(section, dict):
            logger.warning("Ignoring 'tracker' section: expected a mapping")
            return target

        target.update(section)
        logger.info("Custom configuration applied successfully")
        return target


def load_and_apply_config(
    config_path: Optional[str] = None, target: Optional[TrackerSettings] = None
) -> TrackerSettings:
    """
    Load and apply configuration in one step.

    Args:
        config_path: Optional path to custom config file
        target: Settings to update (defaults to the global settings)
    """
    loader = ConfigLoader()
    config = loader.load_config(config_path)
    if config:
        return loader.apply_config(config, target)
    return target or get_settings()
