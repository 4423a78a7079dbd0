"""CLI helper functions for the Ext.Test to Jasmine conversion tool.

This module contains utility functions used by the CLI commands,
separated from the main CLI module for better organization.
"""

import logging
from typing import Any

from .context import ContextManager, ConverterConfig
from .exceptions import ConfigurationError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(debug_mode: bool = False) -> None:
    """Set up logging configuration for the application."""
    log_level = logging.DEBUG if debug_mode else logging.INFO
    logging.basicConfig(level=log_level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, force=True)


def setup_logging_with_level(log_level: str) -> None:
    """Set up logging with a specific level."""
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, force=True)


def parse_indent(indent: str) -> str:
    """Turn an ``--indent`` value into an indent unit.

    ``tab`` (or ``\\t``) selects a tab; a number selects that many spaces;
    anything else is used verbatim and left to configuration validation.
    """
    if indent.lower() in ("tab", "\\t"):
        return "\t"
    if indent.isdigit():
        return " " * int(indent)
    return indent


def build_config(config_file: str | None = None, **overrides: Any) -> ConverterConfig:
    """Create a configuration from an optional YAML file plus CLI overrides.

    Overrides whose value is ``None`` were not given on the command line and
    leave the file (or default) value alone.

    Raises:
        ConfigurationError: If the file cannot be loaded or the merged
            configuration is invalid.
    """
    base_config = ConverterConfig()
    if config_file is not None:
        config_result = ContextManager.load_config_from_file(config_file)
        if not config_result.is_success():
            raise ConfigurationError(f"Error loading configuration file: {config_result.error}", "config_file")
        base_config = config_result.unwrap()

    config_kwargs = {key: value for key, value in overrides.items() if value is not None}
    if "indent_str" in config_kwargs:
        config_kwargs["indent_str"] = parse_indent(config_kwargs["indent_str"])

    return ConverterConfig.from_dict({**base_config.to_dict(), **config_kwargs})
