"""Configuration validation utilities."""

from dataclasses import dataclass, fields
from typing import Any

from .defaults import SolarConfig

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

STRING_FIELDS = ("sicash_rpc", "eth_rpc", "env", "repo", "sicash_sender", "allow_paths")
BOOL_FIELDS = ("optimize", "log_json")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_known_fields(config: dict[str, Any]) -> list[ValidationError]:
        """Report keys that do not name a setting."""
        known = {f.name for f in fields(SolarConfig)}
        return [
            ValidationError(field=key, message="Unknown setting", value=value)
            for key, value in config.items()
            if key not in known
        ]

    @staticmethod
    def validate_types(config: dict[str, Any]) -> list[ValidationError]:
        """Validate value types of string and boolean settings."""
        errors = []

        for name in STRING_FIELDS:
            if name in config and not isinstance(config[name], str):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a string",
                    value=config[name]
                ))

        for name in BOOL_FIELDS:
            if name in config and not isinstance(config[name], bool):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a boolean",
                    value=config[name]
                ))

        return errors

    @staticmethod
    def validate_env(config: dict[str, Any]) -> list[ValidationError]:
        """Validate the environment name used to derive the repository path."""
        value = config.get("env")
        if not isinstance(value, str):
            return []

        if not value.strip():
            return [ValidationError(
                field="env",
                message="Must be a non-empty name",
                value=value
            )]

        if "/" in value or "\\" in value:
            return [ValidationError(
                field="env",
                message="Must not contain path separators",
                value=value
            )]

        return []

    @staticmethod
    def validate_log_level(config: dict[str, Any]) -> list[ValidationError]:
        """Validate the logging level name."""
        value = config.get("log_level")
        if value is None:
            return []

        if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
            return [ValidationError(
                field="log_level",
                message=f"Must be one of {', '.join(LOG_LEVELS)}",
                value=value
            )]

        return []

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []
        errors.extend(ConfigValidator.validate_known_fields(config))
        errors.extend(ConfigValidator.validate_types(config))
        errors.extend(ConfigValidator.validate_env(config))
        errors.extend(ConfigValidator.validate_log_level(config))
        return errors
