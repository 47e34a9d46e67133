"""
ta-graph Configuration Management

Loads and validates the numeric, series and indicator configurations.
"""

import json
import logging
from typing import Dict, Any, Optional
from pathlib import Path

import jsonschema

logger = logging.getLogger(__name__)

CONFIG_FILES = {
    'numeric': 'numeric.json',
    'series': 'series.json',
    'indicators': 'indicators.json',
}


class ConfigLoader:
    """Loads and manages toolkit configurations."""

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize configuration loader.

        Args:
            config_dir: Directory containing configuration files
                (defaults to the directory of this package)
        """
        self.config_dir = Path(config_dir) if config_dir else Path(__file__).resolve().parent
        self.configs = {}
        self._load_all_configs()

    def _load_all_configs(self) -> None:
        """Load all configuration files."""
        for config_name in CONFIG_FILES:
            self.configs[config_name] = self._load_config(config_name)
        logger.info("configs_loaded", extra={
            "config_dir": str(self.config_dir),
            "loaded": sorted(name for name, cfg in self.configs.items() if cfg),
        })

    def _load_config(self, config_name: str) -> Dict[str, Any]:
        """
        Load one configuration file and validate it against its schema.

        A missing file yields an empty config; parse or schema errors are
        logged and re-raised.
        """
        config_path = self.config_dir / CONFIG_FILES[config_name]
        if not config_path.exists():
            return {}

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = json.load(f)
            schema_path = self.config_dir / f'{config_name}.schema.json'
            if schema_path.exists():
                with open(schema_path, 'r', encoding='utf-8') as sf:
                    schema = json.load(sf)
                jsonschema.validate(instance=config, schema=schema)
        except (json.JSONDecodeError, jsonschema.ValidationError) as e:
            logger.error("config_load_failed", extra={"config": config_name, "path": str(config_path), "error": str(e)})
            raise
        return config

    def get_config(self, config_name: str) -> Dict[str, Any]:
        """
        Get configuration by name.

        Args:
            config_name: Name of configuration

        Returns:
            Configuration dictionary
        """
        return self.configs.get(config_name, {})

    def get_all_configs(self) -> Dict[str, Dict[str, Any]]:
        """
        Get all configurations.

        Returns:
            Dictionary of all configurations
        """
        return self.configs.copy()

    def reload_config(self, config_name: str) -> None:
        """
        Reload specific configuration.

        Reloading ``numeric`` does not touch the active Decimal context;
        call ``tagraph.utils.numeric.apply_numeric_config()`` afterwards.

        Args:
            config_name: Name of configuration to reload
        """
        if config_name not in CONFIG_FILES:
            raise KeyError(f"Unknown configuration: {config_name}")
        self.configs[config_name] = self._load_config(config_name)


# Global configuration loader instance
config_loader = ConfigLoader()
