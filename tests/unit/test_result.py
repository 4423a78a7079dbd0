"""Tests for the Result type."""

import pytest

from splurge_exttest_to_jasmine.result import Result, ResultStatus


def test_result_success():
    """Test successful result creation and access."""
    data = {"key": "value"}
    result = Result.success(data)

    assert result.is_success()
    assert not result.is_error()
    assert result.data == data
    assert result.error is None
    assert result.warnings == []
    assert result.metadata == {}


def test_result_error():
    """Test error result creation and access."""
    error = ValueError("Test error")
    result = Result.failure(error, {"source_file": "a.js"})

    assert result.is_error()
    assert not result.is_success()
    assert result.data is None
    assert result.error is error
    assert result.metadata == {"source_file": "a.js"}


def test_result_warning():
    data = ["out.js"]
    result = Result.warning(data, ["Warning 1", "Warning 2"])

    assert result.is_warning()
    assert not result.is_error()
    assert result.data == data
    assert result.warnings == ["Warning 1", "Warning 2"]


def test_result_invariants():
    with pytest.raises(ValueError):
        Result(status=ResultStatus.SUCCESS, error=ValueError("x"))
    with pytest.raises(ValueError):
        Result(status=ResultStatus.ERROR, data="x")


def test_result_unwrap():
    assert Result.success("data").unwrap() == "data"

    with pytest.raises(ValueError, match="Test error"):
        Result.failure(ValueError("Test error")).unwrap()


def test_result_unwrap_warning_returns_data():
    assert Result.warning(["a.js"], ["b.js failed"]).unwrap() == ["a.js"]
