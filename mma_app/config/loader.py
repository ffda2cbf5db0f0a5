"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields, replace
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

import yaml

from ..logging import get_logger
from .defaults import DefaultConfig, get_default_config
from .validation import ConfigValidator, ValidationError

logger = get_logger(__name__)


class ConfigError(ValueError):
    """Raised when a merged configuration fails validation."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_instrument_config(self, instrument_id: str) -> dict[str, Any]:
        """Load instrument-specific configuration overrides."""
        instruments_file = self.config_dir / "instruments.yaml"

        if not instruments_file.exists():
            return {}

        with open(instruments_file) as f:
            instruments_config = yaml.safe_load(f) or {}

        instruments = instruments_config
        if isinstance(instruments_config, dict):
            instruments = instruments_config.get("instruments") or {}
        if not isinstance(instruments, dict):
            raise ConfigError(f"{instruments_file}: 'instruments' must be a mapping", errors=[
                ValidationError(section="instruments", field="instruments",
                                message="Must be a mapping", value=instruments)
            ])

        overrides = instruments.get(instrument_id) or {}
        if not isinstance(overrides, dict):
            raise ConfigError(f"{instruments_file}: entry for {instrument_id} must be a mapping", errors=[
                ValidationError(section="instruments", field=instrument_id,
                                message="Must be a mapping", value=overrides)
            ])

        if overrides:
            logger.debug("Instrument overrides loaded", instrument_id=instrument_id,
                         sections=sorted(overrides))
        return overrides

    def merge_config(
        self,
        instrument_id: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-call overrides (highest priority)
        2. Instrument-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        instrument_config = self.load_instrument_config(instrument_id)
        config = self._deep_merge(config, instrument_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_config(
        self,
        instrument_id: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> DefaultConfig:
        """
        Merge, validate and convert configuration into typed parameter objects.

        Numeric values for Decimal parameters are converted through ``str`` so
        YAML floats such as ``0.5`` become exact Decimals.

        Raises:
            ConfigError: If the merged configuration is invalid
        """
        merged = self.merge_config(instrument_id, overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            logger.warning("Invalid configuration", instrument_id=instrument_id,
                           errors=[f"{e.section}.{e.field}: {e.message}" for e in errors])
            raise ConfigError(f"Invalid configuration for {instrument_id}: "
                              f"{len(errors)} error(s)", errors=errors)

        sections = {}
        for section in fields(self.defaults):
            default_params = getattr(self.defaults, section.name)
            values = merged.get(section.name, {})
            sections[section.name] = self._apply_section(default_params, values)

        return DefaultConfig(**sections)

    def _apply_section(self, params: Any, values: dict[str, Any]) -> Any:
        """Return a copy of a params dataclass with known keys replaced."""
        changes = {}
        for f in fields(params):
            if f.name not in values:
                continue
            value = values[f.name]
            if isinstance(getattr(params, f.name), Decimal) and value is not None:
                value = Decimal(str(value))
            changes[f.name] = value
        return replace(params, **changes)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
