"""Converter configuration and helpers for loading it.

``ConverterConfig`` is an immutable dataclass carrying every option of a
conversion, from the indent unit of the generated code to the file masks
used when converting a directory. ``ContextManager`` loads a
configuration from YAML and validates it, reporting through ``Result``.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any

import yaml

from .config_validation import validate_converter_config, validate_converter_config_object
from .exceptions import ConfigurationError
from .result import Result


@dataclass(frozen=True)
class ConverterConfig:
    """Conversion behavior configuration."""

    # Output layout
    indent_str: str = "\t"
    # None means "use the indent level of the outer container's line"
    indent_level: int | None = None

    # Rewrites
    fixture_name: str = "thisSuite"
    mock_marker: str = "JsMockito"
    convert_jshint_globals: bool = True

    # File discovery for directory conversions
    input_mask: str = "*Test.js"
    output_mask: str = "*Spec.js"

    # Logging and behavior
    log_level: str = "INFO"
    fail_fast: bool = False
    dry_run: bool = False

    def validate(self) -> None:
        """Validate the configuration.

        Raises:
            ConfigurationError: If any value is invalid.
        """
        validate_converter_config_object(self)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "ConverterConfig":
        """Create a validated config from a dictionary.

        Unknown keys are ignored so configuration files may carry settings
        for other tools.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        filtered = {k: v for k, v in config_dict.items() if k in cls.__dataclass_fields__}
        validated = validate_converter_config(filtered)
        return cls(**validated.model_dump())

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


class ContextManager:
    """Helpers for loading and validating converter configuration.

    Methods return ``Result`` instances so callers can report failures
    without handling exceptions.
    """

    @staticmethod
    def load_config_from_file(config_file: str) -> Result[ConverterConfig]:
        """Load a ``ConverterConfig`` from a YAML file.

        Args:
            config_file: Path to the YAML configuration file.

        Returns:
            A ``Result`` holding the configuration, or an error describing
            why it could not be loaded.
        """
        try:
            with open(config_file, encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except FileNotFoundError:
            return Result.failure(
                FileNotFoundError(f"Configuration file not found: {config_file}"), {"config_file": config_file}
            )
        except (OSError, yaml.YAMLError) as e:
            return Result.failure(ValueError(f"Error loading configuration: {e}"), {"config_file": config_file})

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            return Result.failure(
                ValueError("Configuration file must contain a mapping"), {"config_file": config_file}
            )

        try:
            return Result.success(ConverterConfig.from_dict(config_data), {"config_file": config_file})
        except ConfigurationError as e:
            return Result.failure(e, {"config_file": config_file})

    @staticmethod
    def validate_config(config: ConverterConfig) -> Result[ConverterConfig]:
        """Validate ``config``, returning warnings for unusual but legal values."""
        try:
            config.validate()
        except ConfigurationError as e:
            return Result.failure(e)

        issues = []
        if config.indent_str.strip(" ") == "" and len(config.indent_str) not in (2, 4):
            issues.append(f"indent_str of {len(config.indent_str)} spaces is unusual; 2 or 4 are typical")
        if " " in config.indent_str and "\t" in config.indent_str:
            issues.append("indent_str mixes tabs and spaces")

        if issues:
            return Result.warning(config, [f"Configuration issues: {', '.join(issues)}"])
        return Result.success(config)
