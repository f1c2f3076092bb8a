"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    ChainParams,
    ClassifierParams,
    EngineConfig,
    LoggingParams,
    MetadataParams,
    TallyParams,
    get_default_config,
)
from .validation import ConfigValidator

_SECTIONS = {
    "classifier": ClassifierParams,
    "metadata": MetadataParams,
    "tally": TallyParams,
    "chain": ChainParams,
    "logging": LoggingParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: EngineConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_network_config(self, network_id: str) -> dict[str, Any]:
        """Load network-specific configuration overrides."""
        networks_file = self.config_dir / "networks.yaml"

        if not networks_file.exists():
            return {}

        with open(networks_file) as f:
            networks_config = yaml.safe_load(f) or {}

        return networks_config.get("networks", {}).get(network_id, {}) or {}  # type: ignore[no-any-return]

    def merge_config(
        self,
        network_id: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Caller overrides (highest priority)
        2. Network-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        if network_id:
            network_config = self.load_network_config(network_id)
            config = self._deep_merge(config, network_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(
        self,
        network_id: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> EngineConfig:
        """
        Merge and validate configuration, returning typed parameters.

        Raises:
            ConfigurationError: If the merged configuration is invalid
        """
        config = self.merge_config(network_id, overrides)

        errors = ConfigValidator.validate_config(config)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            raise ConfigurationError(
                "Invalid configuration: " + "; ".join(error_msgs),
                errors=errors,
                context={"network_id": network_id},
            )

        return self._dict_to_config(config)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                elif isinstance(value, tuple):
                    result[field_name] = list(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _dict_to_config(self, config: dict[str, Any]) -> EngineConfig:
        """Build typed parameter dataclasses from a merged dictionary."""
        sections = {}
        for section_name, params_cls in _SECTIONS.items():
            values = dict(config.get(section_name, {}))
            for field in fields(params_cls):
                if isinstance(values.get(field.name), list):
                    values[field.name] = tuple(values[field.name])
            sections[section_name] = params_cls(**values)
        return EngineConfig(**sections)

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
