"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import codecs
import json
from dataclasses import dataclass, field, fields
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..logging_config import get_logger
from .exceptions import ConfigError

logger = get_logger(__name__)


@dataclass
class GeneratorConfig:
    """Settings shared by every layer generator."""

    # Output settings
    encoding: str = "gbk"
    source_extension: str = ".java"

    # Templates
    template_dir: Optional[str] = None

    # Rendering
    date: Optional[str] = None  # ISO date pinned into generated headers
    author: Optional[str] = None

    # Custom settings
    custom: Dict[str, Any] = field(default_factory=dict)

    def render_date(self) -> str:
        """Date stamped into generated files, today unless pinned."""
        return self.date or date.today().isoformat()


DEFAULTS: Dict[str, Any] = {
    "encoding": "gbk",
    "source_extension": ".java",
    "template_dir": None,
    "date": None,
    "author": None,
}


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        self._defaults: Dict[str, Any] = dict(DEFAULTS)

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete generator configuration.

        Args:
            custom_config: Keyword overrides, applied last
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration

        Raises:
            ConfigError: Unreadable file or unsupported encoding
        """
        base_config = dict(self._defaults)

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(
                {key: value for key, value in custom_config.items() if value is not None}
            )

        config = self._dict_to_config(base_config)
        self._check_encoding(config.encoding)
        return config

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded generator configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    @staticmethod
    def _check_encoding(encoding: str):
        try:
            codecs.lookup(encoding)
        except LookupError as e:
            raise ConfigError(f"Unsupported output encoding: {encoding}") from e

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of validation warnings
        """
        warnings = []

        if not config.source_extension.startswith("."):
            warnings.append(
                f"source_extension should start with '.': {config.source_extension}"
            )

        if config.template_dir and not Path(config.template_dir).is_dir():
            warnings.append(f"Template directory not found: {config.template_dir}")

        if config.date:
            try:
                date.fromisoformat(config.date)
            except ValueError:
                warnings.append(f"Invalid ISO date: {config.date}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)
