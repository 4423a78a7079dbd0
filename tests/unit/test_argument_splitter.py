"""Unit tests for splitting call arguments on top-level commas."""

import pytest

from splurge_exttest_to_jasmine.argument_splitter import split_arguments
from splurge_exttest_to_jasmine.exceptions import UnbalancedDelimiterError, UnterminatedLiteralError


def test_split_simple_arguments():
    assert split_arguments(" a, b ,c ") == ["a", "b", "c"]


def test_split_empty_text():
    assert split_arguments("") == []
    assert split_arguments("   ") == []


def test_split_ignores_nested_commas():
    text = "arg1, fn( 3, 4 ), [ a, b ], { c: d, e: f }"
    assert split_arguments(text) == ["arg1", "fn( 3, 4 )", "[ a, b ]", "{ c: d, e: f }"]


def test_split_ignores_commas_in_strings_and_regexes():
    text = "'a,b', \"c,d\", /e,f/g"
    assert split_arguments(text) == ["'a,b'", '"c,d"', "/e,f/g"]


def test_split_keeps_string_concatenation_together():
    text = "'/x', obj.fn(), \"msg \" + name"
    assert split_arguments(text) == ["'/x'", "obj.fn()", '"msg " + name']


def test_split_ignores_commas_in_comments():
    text = "a /* x, y */, b // c, d\n"
    assert split_arguments(text) == ["a /* x, y */", "b // c, d"]


def test_split_trailing_comma_produces_no_empty_argument():
    assert split_arguments("a, b,") == ["a", "b"]


def test_split_unbalanced_bracket():
    with pytest.raises(UnbalancedDelimiterError):
        split_arguments("a, fn( b")


def test_split_unterminated_string():
    with pytest.raises(UnterminatedLiteralError):
        split_arguments("a, 'b")
