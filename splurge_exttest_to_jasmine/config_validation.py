"""Configuration validation using pydantic schemas.

``ValidatedConverterConfig`` mirrors ``ConverterConfig`` field for field
and checks the values a user can supply through a YAML file or the CLI.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_JS_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][\w$]*")


class ValidatedConverterConfig(BaseModel):
    """Validated version of ConverterConfig with runtime validation."""

    model_config = ConfigDict(validate_assignment=True)

    # Output layout
    indent_str: str = Field(default="\t", description="Text of one indent unit in the generated code")
    indent_level: int | None = Field(
        default=None, ge=0, le=20, description="Starting indent level; None uses the outer container's indent"
    )

    # Rewrites
    fixture_name: str = Field(default="thisSuite", description="Shared fixture variable replacing 'this'")
    mock_marker: str = Field(default="JsMockito", description="Text marking a try block as a mock verification")
    convert_jshint_globals: bool = Field(default=True, description="Whether to rewrite the /*global */ header")

    # File discovery
    input_mask: str = Field(default="*Test.js", description="Wildcard mask selecting input files in a directory")
    output_mask: str = Field(default="*Spec.js", description="Wildcard mask naming output files")

    # Behavior
    log_level: str = Field(default="INFO", description="Default logging level")
    fail_fast: bool = Field(default=False, description="Stop a directory conversion at the first failure")
    dry_run: bool = Field(default=False, description="Convert without writing any files")

    @field_validator("indent_str")
    @classmethod
    def validate_indent_str(cls, v):
        if not v or v.strip(" \t"):
            raise ValueError(f"indent_str must be a non-empty run of spaces and/or tabs, got {v!r}")
        return v

    @field_validator("fixture_name")
    @classmethod
    def validate_fixture_name(cls, v):
        if not _JS_IDENTIFIER_RE.fullmatch(v or ""):
            raise ValueError(f"fixture_name must be a JavaScript identifier, got {v!r}")
        if v == "this":
            raise ValueError("fixture_name cannot be 'this'")
        return v

    @field_validator("mock_marker")
    @classmethod
    def validate_mock_marker(cls, v):
        if not v or not v.strip():
            raise ValueError("mock_marker cannot be empty or whitespace-only")
        return v

    @field_validator("input_mask", "output_mask")
    @classmethod
    def validate_mask(cls, v):
        if v.count("*") != 1:
            raise ValueError(f"File masks must contain exactly one '*' wildcard, got {v!r}")
        if "/" in v or "\\" in v:
            raise ValueError(f"File masks name files, not paths, got {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        if not isinstance(v, str) or v.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}, got '{v}'")
        return v.upper()

    @model_validator(mode="after")
    def validate_masks_differ(self) -> ValidatedConverterConfig:
        """Reject masks that would map every input file onto itself."""
        if self.input_mask == self.output_mask:
            raise ValueError(
                f"input_mask and output_mask are both '{self.input_mask}': "
                "converted files would overwrite their sources"
            )
        return self


def validate_converter_config(config_dict: dict[str, Any]) -> ValidatedConverterConfig:
    """Validate a converter configuration dictionary.

    Raises:
        ConfigurationError: If the configuration is invalid.
    """
    try:
        return ValidatedConverterConfig(**config_dict)
    except PydanticValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        loc = first.get("loc") or ()
        raise ConfigurationError(
            f"Invalid converter configuration: {e}", config_key=str(loc[0]) if loc else None
        ) from e


def validate_converter_config_object(config) -> ValidatedConverterConfig:
    """Validate an existing ConverterConfig object.

    Raises:
        ConfigurationError: If the configuration is invalid.
    """
    return validate_converter_config(config.to_dict())
