"""Configuration loader with tiered parameter precedence."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    CONFIG_FILE_ENV,
    DEFAULT_CONFIG_FILE,
    ENV_VARS,
    SolarConfig,
    get_default_config,
)
from .validation import BOOL_FIELDS, ConfigValidator

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with tiered precedence."""

    config_file: Path
    defaults: SolarConfig

    @classmethod
    def create(
        cls,
        config_file: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None
    ) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_file is None:
            environ = os.environ if environ is None else environ
            config_file = Path(environ.get(CONFIG_FILE_ENV) or DEFAULT_CONFIG_FILE)

        return cls(
            config_file=Path(config_file),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load settings from the YAML config file, if there is one."""
        if not self.config_file.exists():
            return {}

        try:
            with open(self.config_file) as f:
                file_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"error reading config file {self.config_file}: {e}",
                context={"path": str(self.config_file)}
            ) from e

        if file_config is None:
            return {}

        if not isinstance(file_config, dict):
            raise ConfigurationError(
                f"config file {self.config_file} must contain a mapping",
                context={"path": str(self.config_file)}
            )

        return file_config

    def load_env_config(self, environ: Mapping[str, str]) -> dict[str, Any]:
        """Collect settings from environment variables."""
        config: dict[str, Any] = {}

        for name, var in ENV_VARS.items():
            if var not in environ:
                continue

            value = environ[var]
            if name in BOOL_FIELDS:
                config[name] = self._parse_bool(value)
            else:
                config[name] = value

        return config

    def load(
        self,
        environ: Optional[Mapping[str, str]] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> SolarConfig:
        """
        Resolve the configuration snapshot.

        Priority order:
        1. Explicit overrides, usually command-line flags (highest priority)
        2. Environment variables
        3. YAML config file
        4. Built-in defaults (lowest priority)

        Overrides whose value is None are treated as not given.
        """
        environ = os.environ if environ is None else environ

        config = self._dataclass_to_dict(self.defaults)
        config.update(self.load_file_config())
        config.update(self.load_env_config(environ))

        if overrides:
            config.update({k: v for k, v in overrides.items() if v is not None})

        errors = ConfigValidator.validate_config(config)
        if errors:
            details = "; ".join(f"{err.field}: {err.message} (got: {err.value!r})" for err in errors)
            raise ConfigurationError(f"invalid configuration: {details}", errors=errors)

        return SolarConfig(**config)

    def _dataclass_to_dict(self, obj: SolarConfig) -> dict[str, Any]:
        """Convert the defaults dataclass to a dictionary."""
        return {f.name: getattr(obj, f.name) for f in fields(obj)}

    @staticmethod
    def _parse_bool(value: str) -> Any:
        """Parse an environment boolean; unparseable values are left for validation."""
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
        return value
