"""Property-based tests for whole-file conversion and body helpers."""

import re

from hypothesis import given

from splurge_exttest_to_jasmine.context import ConverterConfig
from splurge_exttest_to_jasmine.converter import convert
from splurge_exttest_to_jasmine.helpers.utility import dedent_body
from tests.hypothesis_config import CONVERSION_SETTINGS, DEFAULT_SETTINGS
from tests.property.strategies import code_bodies, ext_test_sources

_IT_RE = re.compile(r'^\t(x?it)\( "(.*)", function\(\) \{$', re.MULTILINE)


class TestDedentProperties:
    @DEFAULT_SETTINGS
    @given(body=code_bodies())
    def test_dedent_is_idempotent(self, body: str) -> None:
        once = dedent_body(body)
        assert dedent_body(once) == once

    @DEFAULT_SETTINGS
    @given(body=code_bodies())
    def test_dedented_first_line_has_no_indent(self, body: str) -> None:
        first_line = dedent_body(body).split("\n")[0]
        assert first_line == first_line.lstrip(" \t")


class TestConversionProperties:
    @CONVERSION_SETTINGS
    @given(case=ext_test_sources())
    def test_every_test_is_emitted_in_order(self, case) -> None:
        source, names, _, _ = case
        output = convert(source, ConverterConfig(convert_jshint_globals=False))
        assert [match.group(2) for match in _IT_RE.finditer(output)] == names

    @CONVERSION_SETTINGS
    @given(case=ext_test_sources())
    def test_ignored_tests_become_xit(self, case) -> None:
        source, names, ignored, _ = case
        output = convert(source, ConverterConfig(convert_jshint_globals=False))
        kinds = {match.group(2): match.group(1) for match in _IT_RE.finditer(output)}
        assert {name for name in names if kinds[name] == "xit"} == ignored

    @CONVERSION_SETTINGS
    @given(case=ext_test_sources())
    def test_error_tests_expect_their_message(self, case) -> None:
        source, _, _, errors = case
        output = convert(source, ConverterConfig(convert_jshint_globals=False))
        assert output.count("} ).toThrow( ") == len(errors)
        for message in errors.values():
            assert f'}} ).toThrow( "{message}" );' in output

    @CONVERSION_SETTINGS
    @given(case=ext_test_sources())
    def test_output_braces_are_balanced(self, case) -> None:
        source, _, _, _ = case
        output = convert(source)
        assert output.count("{") == output.count("}")
        assert output.count("(") == output.count(")")
