"""Tests for pydantic validation of converter configuration."""

import pytest
from pydantic import ValidationError

from splurge_exttest_to_jasmine.config_validation import (
    ValidatedConverterConfig,
    validate_converter_config,
    validate_converter_config_object,
)
from splurge_exttest_to_jasmine.context import ConverterConfig
from splurge_exttest_to_jasmine.exceptions import ConfigurationError


def test_defaults_are_valid():
    validated = ValidatedConverterConfig()
    assert validated.model_dump() == ConverterConfig().to_dict()


@pytest.mark.parametrize("indent_str", ["\t", "  ", "    ", "\t\t"])
def test_valid_indent(indent_str):
    assert validate_converter_config({"indent_str": indent_str}).indent_str == indent_str


@pytest.mark.parametrize("indent_str", ["", "x", " a "])
def test_invalid_indent(indent_str):
    with pytest.raises(ConfigurationError) as exc_info:
        validate_converter_config({"indent_str": indent_str})
    assert exc_info.value.details["config_key"] == "indent_str"


@pytest.mark.parametrize("indent_level", [-1, 21])
def test_indent_level_bounds(indent_level):
    with pytest.raises(ConfigurationError):
        validate_converter_config({"indent_level": indent_level})


@pytest.mark.parametrize("fixture_name", ["ctx", "_suite", "$s", "thisSuite2"])
def test_valid_fixture_name(fixture_name):
    assert validate_converter_config({"fixture_name": fixture_name}).fixture_name == fixture_name


@pytest.mark.parametrize("fixture_name", ["this", "1abc", "a-b", ""])
def test_invalid_fixture_name(fixture_name):
    with pytest.raises(ConfigurationError):
        validate_converter_config({"fixture_name": fixture_name})


def test_mock_marker_cannot_be_blank():
    with pytest.raises(ConfigurationError):
        validate_converter_config({"mock_marker": "   "})


@pytest.mark.parametrize("mask", ["Test.js", "**Test.js", "dir/*Test.js", "dir\\*Test.js"])
def test_invalid_masks(mask):
    with pytest.raises(ConfigurationError):
        validate_converter_config({"input_mask": mask})


def test_masks_must_differ():
    with pytest.raises(ConfigurationError):
        validate_converter_config({"input_mask": "*.js", "output_mask": "*.js"})


def test_log_level_is_normalized():
    assert validate_converter_config({"log_level": "warning"}).log_level == "WARNING"

    with pytest.raises(ConfigurationError):
        validate_converter_config({"log_level": "LOUD"})


def test_validate_assignment():
    validated = ValidatedConverterConfig()
    with pytest.raises(ValidationError):
        validated.fixture_name = "this"


def test_validate_config_object():
    assert validate_converter_config_object(ConverterConfig(fixture_name="ctx")).fixture_name == "ctx"
