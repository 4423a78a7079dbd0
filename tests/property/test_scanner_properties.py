"""Property-based tests for brace matching and argument splitting."""

from hypothesis import given

from splurge_exttest_to_jasmine.argument_splitter import split_arguments
from splurge_exttest_to_jasmine.scanner import line_number_at, match_brace, strip_comments
from tests.hypothesis_config import DEFAULT_SETTINGS
from tests.property.strategies import balanced_code, call_arguments, js_comments


class TestScannerProperties:
    @DEFAULT_SETTINGS
    @given(body=balanced_code())
    def test_match_brace_finds_the_outer_close(self, body: str) -> None:
        text = "{" + body + "}"
        assert match_brace(text, 0) == len(text) - 1

    @DEFAULT_SETTINGS
    @given(body=balanced_code(), tail=balanced_code())
    def test_match_brace_ignores_trailing_code(self, body: str, tail: str) -> None:
        text = "(" + body + ")" + tail
        assert match_brace(text, 0) == len(body) + 1

    @DEFAULT_SETTINGS
    @given(comment=js_comments())
    def test_comments_are_stripped(self, comment: str) -> None:
        stripped = strip_comments("a" + comment + "b")
        assert "{" not in stripped
        assert stripped.count("\n") == comment.count("\n")

    @DEFAULT_SETTINGS
    @given(body=balanced_code())
    def test_line_numbers_count_line_breaks(self, body: str) -> None:
        assert line_number_at(body, len(body)) == body.count("\n") + 1


class TestArgumentSplitterProperties:
    @DEFAULT_SETTINGS
    @given(args=call_arguments())
    def test_top_level_commas_only(self, args: list[str]) -> None:
        assert split_arguments(", ".join(args)) == args

    @DEFAULT_SETTINGS
    @given(args=call_arguments())
    def test_trailing_comma_is_ignored(self, args: list[str]) -> None:
        text = " , ".join(args) + (" ," if args else "")
        assert split_arguments(text) == args
