"""Cursor-based structural parser for Ext.Test source files.

The parser keeps one integer cursor over the whole input. Each
``parse_*`` method first skips whitespace and comments, then tries to
recognise its construct at the cursor position only. When nothing is
recognised the method returns ``None`` and the cursor is left exactly
where it was, so callers can try alternatives in turn. When a construct
is recognised its body is delimited with the scanner's brace matching
and the cursor is moved past it.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
import re
from dataclasses import dataclass

from .exceptions import (
    NoOuterContainerError,
    SourceLocationError,
    UnexpectedContentError,
    UnsupportedShouldDirectiveError,
)
from .helpers.utility import indent_level_of
from .literals import read_literal
from .nodes import ContainerNode, DiTestCase, HelperMethod, SetUp, Should, Suite, TearDown, Test, TestCase
from .scanner import QUOTE_CHARS, line_number_at, match_brace, match_literal, skip_whitespace_and_comments, snippet_at

logger = logging.getLogger(__name__)

# Anchor of the outer container. Group 1 is the indent, group 2 the package
# and group 3 the Ext.test class (absent for the object literal form).
OUTER_ANCHOR_RE = re.compile(
    r"^([ \t]*)tests\.([\w$.]+?)\.add\(\s*(?:new\s+Ext\.test\.(\w*(?:Suite|Case))\(\s*)?(?=\{)",
    re.MULTILINE,
)

_NEW_CALL_RE = re.compile(r"new\s+([A-Za-z_$][\w$.]*)\s*\(\s*(?=\{)")
_NAME_KEY_RE = re.compile(r"name\s*:\s*")
_TTYPE_KEY_RE = re.compile(r"ttype\s*:\s*")
_BARE_VALUE_RE = re.compile(r"[\w$.]+")
_ITEMS_RE = re.compile(r"items\s*:\s*\[")
_SET_UP_RE = re.compile(r"setUp\s*:\s*function\s*\(\s*\)\s*\{")
_TEAR_DOWN_RE = re.compile(r"tearDown\s*:\s*function\s*\(\s*\)\s*\{")
_SHOULD_RE = re.compile(r"_should\s*:\s*(?=\{)")
_TEST_METHOD_RE = re.compile(r"test_?([A-Za-z_$][\w$]*)\s*:\s*function\s*\(\s*\)\s*\{")
_QUOTED_METHOD_TAIL_RE = re.compile(r"\s*:\s*function\s*\(\s*\)\s*\{")
_PLACEHOLDER_RE = re.compile(r"(['\"])\1\s*:\s*function\s*\([^)]*\)\s*\{")
_HELPER_METHOD_RE = re.compile(r"([A-Za-z_$][\w$]*)\s*:\s*function\s*\(([^)]*)\)\s*\{")
_OUTER_CLOSE_NEW_RE = re.compile(r"\s*\)\s*\)\s*;?")
_OUTER_CLOSE_LITERAL_RE = re.compile(r"\s*\)\s*;?")

# Ext.test classes written as ``new Ext.test.X( {...} )`` that are not subclasses.
_EXT_SUITE_CLASSES = ("Ext.test.TestSuite", "Ext.test.Suite")
_EXT_CASE_CLASSES = ("Ext.test.TestCase", "Ext.test.Case")

SHOULD_DIRECTIVES = ("ignore", "error")


@dataclass
class ParseResult:
    """Outcome of parsing a whole input.

    Attributes:
        tree: The outer ``Suite`` or ``TestCase`` node.
        start_index: Index where the outer container's line begins.
        end_index: Index just past the outer container's closing text.
        indent_level: Indent level of the outer container's line.
    """

    tree: ContainerNode
    start_index: int
    end_index: int
    indent_level: int


@dataclass
class _ContainerHeader:
    name: str
    end: int
    open_index: int
    close_index: int
    constructor_name: str | None = None


class StructuralParser:
    """Recursive-descent parser building the node tree from Ext.Test source.

    A parser instance holds the cursor for a single input and must not be
    shared between conversions.

    Args:
        text: The whole input text.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    # ------------------------------------------------------------------
    # Entry point

    def parse(self) -> ParseResult:
        """Locate and parse the outer container.

        Raises:
            NoOuterContainerError: If no outer Suite or TestCase anchor exists.
            SourceLocationError: For any structural problem found while parsing.
        """
        match = OUTER_ANCHOR_RE.search(self.text)
        if match is None:
            raise NoOuterContainerError(
                "No outer Ext.Test Suite or TestCase found", line_number_at(self.text, 0), snippet_at(self.text, 0)
            )

        indent, package, ext_class = match.group(1), match.group(2), match.group(3)
        logger.debug(f"Found outer container anchor for package '{package}' at index {match.start()}")

        self.pos = match.end()
        if ext_class is not None and ext_class.endswith("Case"):
            tree: ContainerNode | None = self.parse_test_case()
        else:
            tree = self._parse_outer_suite()
        if tree is None:
            raise self._unexpected("Expected the outer container's '{ name: ... }' header")
        tree.name = f"{package}.{tree.name}"

        close_re = _OUTER_CLOSE_NEW_RE if ext_class is not None else _OUTER_CLOSE_LITERAL_RE
        close = close_re.match(self.text, self.pos)
        if close is None:
            raise self._unexpected("Expected the closing parenthesis of the outer container")
        self.pos = close.end()

        result = ParseResult(tree, match.start(), self.pos, indent_level_of(indent))
        logger.debug(
            f"Parsed outer {type(tree).__name__} '{tree.name}' spanning [{result.start_index}, {result.end_index})"
        )
        return result

    def _parse_outer_suite(self) -> ContainerNode | None:
        # The outer wrapper has no ttype marker: an items list makes it a
        # Suite, anything else makes it a TestCase.
        header = self._match_container_header(self.pos, allow_new=False)
        if header is None:
            return None
        self.pos = header.end
        self._skip_ttype()
        if _ITEMS_RE.match(self.text, self.pos):
            suite = Suite(header.name)
            self._parse_items(suite, header)
            return suite
        test_case = TestCase(header.name)
        self.parse_test_case_items(test_case, header.close_index)
        self._close_container(header)
        return test_case

    # ------------------------------------------------------------------
    # Containers

    def parse_suite(self) -> Suite | None:
        """Parse a nested ``{ name: ..., ttype: ..., items: [...] }`` suite at the cursor."""
        start = self.pos
        self._skip()
        header = self._match_container_header(self.pos, allow_new=True)
        if header is None or (header.constructor_name and header.constructor_name not in _EXT_SUITE_CLASSES):
            self.pos = start
            return None

        after_header = self._skip_from(header.end)
        if not _TTYPE_KEY_RE.match(self.text, after_header):
            self.pos = start
            return None

        self.pos = header.end
        self._skip_ttype()
        suite = Suite(header.name)
        if _ITEMS_RE.match(self.text, self.pos):
            self._parse_items(suite, header)
        else:
            self._close_container(header)
        logger.debug(f"Parsed suite '{suite.name}' with {len(suite.children)} children")
        return suite

    def parse_test_case(self) -> TestCase | None:
        """Parse a test case at the cursor.

        Both the plain object literal form and the direct instantiation of a
        test case subclass (``new some.pkg.SomeTest( {...} )``) are accepted.
        """
        start = self.pos
        self._skip()
        header = self._match_container_header(self.pos, allow_new=True)
        if header is None or header.constructor_name in _EXT_SUITE_CLASSES:
            self.pos = start
            return None
        if _TTYPE_KEY_RE.match(self.text, self._skip_from(header.end)):
            self.pos = start
            return None

        if header.constructor_name and header.constructor_name not in _EXT_CASE_CLASSES:
            test_case: TestCase = DiTestCase(header.name, constructor_name=header.constructor_name)
        else:
            test_case = TestCase(header.name)

        self.pos = header.end
        self.parse_test_case_items(test_case, header.close_index)
        self._close_container(header)
        logger.debug(f"Parsed test case '{test_case.name}' with {len(test_case.tests)} tests")
        return test_case

    def parse_test_case_items(self, test_case: TestCase, close_index: int) -> None:
        """Parse the members of a test case up to its closing brace.

        Members are tried in order: setUp, tearDown, ``_should``, test,
        empty placeholder, helper method. Commas between members are
        optional.

        Raises:
            UnexpectedContentError: If text that is none of these is found,
                or a setUp, tearDown or ``_should`` member appears twice.
        """
        while True:
            self._skip()
            if self.pos >= close_index:
                break

            item_start = self.pos
            set_up = self.parse_set_up()
            if set_up is not None:
                if test_case.set_up is not None:
                    raise self._unexpected(f"Duplicate setUp() in test case '{test_case.name}'", item_start)
                test_case.set_up = set_up
            else:
                tear_down = self.parse_tear_down()
                if tear_down is not None:
                    if test_case.tear_down is not None:
                        raise self._unexpected(f"Duplicate tearDown() in test case '{test_case.name}'", item_start)
                    test_case.tear_down = tear_down
                else:
                    should = self.parse_should()
                    if should is not None:
                        if test_case.should is not None:
                            raise self._unexpected(
                                f"Duplicate _should block in test case '{test_case.name}'", item_start
                            )
                        test_case.should = should
                    else:
                        test = self.parse_test()
                        if test is not None:
                            test_case.tests.append(test)
                        elif not self.parse_empty_placeholder():
                            helper = self.parse_helper_method()
                            if helper is None:
                                raise self._unexpected(f"Unexpected content in test case '{test_case.name}'")
                            test_case.helper_methods.append(helper)

            self._skip()
            if self.text.startswith(",", self.pos):
                self.pos += 1

    # ------------------------------------------------------------------
    # Test case members

    def parse_should(self) -> Should | None:
        """Parse a ``_should : { ignore: {...}, error: {...} }`` block at the cursor."""
        start = self.pos
        self._skip()
        match = _SHOULD_RE.match(self.text, self.pos)
        if match is None:
            self.pos = start
            return None

        open_index = match.end()
        close_index = match_brace(self.text, open_index)
        line_offset = line_number_at(self.text, open_index) - 1
        try:
            directives = read_literal(self.text[open_index : close_index + 1])
        except SourceLocationError as exc:
            exc.relocate(line_offset)
            raise

        should = Should()
        for key, value in directives.items():
            if key not in SHOULD_DIRECTIVES:
                raise self._unsupported_directive(f"Unsupported _should directive '{key}'", key, open_index)
            if not isinstance(value, dict):
                raise self._unsupported_directive(
                    f"The _should '{key}' directive must be an object literal", key, open_index
                )
            if key == "ignore":
                should.ignored_tests.update(value)
            else:
                for test_name, message in value.items():
                    if not isinstance(message, str):
                        raise self._unsupported_directive(
                            f"Expected error message for '{test_name}' must be a string", key, open_index
                        )
                    should.error_tests[test_name] = message

        self.pos = close_index + 1
        return should

    def parse_set_up(self) -> SetUp | None:
        match = self._match_here(_SET_UP_RE)
        if match is None:
            return None
        body, line = self._consume_body(match.end() - 1)
        return SetUp(body, line)

    def parse_tear_down(self) -> TearDown | None:
        match = self._match_here(_TEAR_DOWN_RE)
        if match is None:
            return None
        body, line = self._consume_body(match.end() - 1)
        return TearDown(body, line)

    def parse_test(self) -> Test | None:
        """Parse a test method at the cursor.

        Two naming conventions are recognised: an identifier starting with
        ``test`` (the name is the remainder, with an optional underscore
        after ``test`` dropped) and a quoted phrase such as
        ``"something should happen"`` (the name is the whole phrase).
        """
        start = self.pos
        self._skip()
        match = _TEST_METHOD_RE.match(self.text, self.pos)
        if match is not None:
            name = match.group(1)
            open_index = match.end() - 1
        else:
            quoted = self._match_quoted_method(self.pos)
            if quoted is None:
                self.pos = start
                return None
            name, open_index = quoted

        body, line = self._consume_body(open_index)
        return Test(name, body, line)

    def parse_empty_placeholder(self) -> bool:
        """Skip an empty-named ``"" : function() {...}`` placeholder member.

        Returns:
            True when a placeholder was found and skipped.
        """
        match = self._match_here(_PLACEHOLDER_RE)
        if match is None:
            return False
        self.pos = match_brace(self.text, match.end() - 1) + 1
        return True

    def parse_helper_method(self) -> HelperMethod | None:
        match = self._match_here(_HELPER_METHOD_RE)
        if match is None:
            return None
        name, args_list = match.group(1), match.group(2)
        body, line = self._consume_body(match.end() - 1)
        return HelperMethod(name, args_list, body, line)

    # ------------------------------------------------------------------
    # Internal helpers

    def _skip(self) -> None:
        self.pos = skip_whitespace_and_comments(self.text, self.pos)

    def _skip_from(self, index: int) -> int:
        return skip_whitespace_and_comments(self.text, index)

    def _match_here(self, pattern: re.Pattern[str]) -> re.Match[str] | None:
        start = self.pos
        self._skip()
        match = pattern.match(self.text, self.pos)
        if match is None:
            self.pos = start
        return match

    def _match_container_header(self, index: int, allow_new: bool) -> _ContainerHeader | None:
        constructor_name = None
        if allow_new:
            new_call = _NEW_CALL_RE.match(self.text, index)
            if new_call is not None:
                constructor_name = new_call.group(1)
                index = new_call.end()
        if not self.text.startswith("{", index):
            return None

        open_index = index
        name_index = self._skip_from(open_index + 1)
        name_key = _NAME_KEY_RE.match(self.text, name_index)
        if name_key is None or self.text[name_key.end() : name_key.end() + 1] not in QUOTE_CHARS:
            return None

        quote_index = name_key.end()
        name_close = match_literal(self.text, quote_index)
        end = self._skip_from(name_close + 1)
        if self.text.startswith(",", end):
            end += 1

        close_index = match_brace(self.text, open_index)
        return _ContainerHeader(
            name=self.text[quote_index + 1 : name_close],
            end=end,
            open_index=open_index,
            close_index=close_index,
            constructor_name=constructor_name,
        )

    def _skip_ttype(self) -> None:
        self._skip()
        ttype = _TTYPE_KEY_RE.match(self.text, self.pos)
        if ttype is None:
            return
        value_index = ttype.end()
        if self.text[value_index : value_index + 1] in QUOTE_CHARS:
            self.pos = match_literal(self.text, value_index) + 1
        else:
            value = _BARE_VALUE_RE.match(self.text, value_index)
            if value is None:
                raise self._unexpected("Expected a value for 'ttype'", value_index)
            self.pos = value.end()
        self._skip()
        if self.text.startswith(",", self.pos):
            self.pos += 1
        self._skip()

    def _parse_items(self, suite: Suite, header: _ContainerHeader) -> None:
        self._skip()
        items = _ITEMS_RE.match(self.text, self.pos)
        list_open = items.end() - 1
        list_close = match_brace(self.text, list_open)
        self.pos = items.end()

        while True:
            self._skip()
            if self.pos >= list_close:
                break
            child: ContainerNode | None = self.parse_suite()
            if child is None:
                child = self.parse_test_case()
            if child is None:
                raise self._unexpected(f"Expected a suite or test case in the items of '{suite.name}'")
            suite.children.append(child)
            self._skip()
            if self.text.startswith(",", self.pos):
                self.pos += 1

        self.pos = list_close + 1
        self._skip()
        if self.text.startswith(",", self.pos):
            self.pos += 1
        self._close_container(header)

    def _close_container(self, header: _ContainerHeader) -> None:
        self._skip()
        if self.pos != header.close_index:
            raise self._unexpected(f"Unexpected content in '{header.name}'")
        self.pos = header.close_index + 1
        if header.constructor_name:
            self._skip()
            if not self.text.startswith(")", self.pos):
                raise self._unexpected(f"Expected ')' to close 'new {header.constructor_name}('")
            self.pos += 1

    def _match_quoted_method(self, index: int) -> tuple[str, int] | None:
        if self.text[index : index + 1] not in QUOTE_CHARS:
            return None
        close = match_literal(self.text, index)
        name = self.text[index + 1 : close]
        if not name:
            return None
        tail = _QUOTED_METHOD_TAIL_RE.match(self.text, close + 1)
        if tail is None:
            return None
        return name, tail.end() - 1

    def _consume_body(self, open_index: int) -> tuple[str, int]:
        close_index = match_brace(self.text, open_index)
        body = self.text[open_index + 1 : close_index]
        first_code = len(body) - len(body.lstrip())
        line = line_number_at(self.text, open_index + 1 + first_code)
        self.pos = close_index + 1
        return body, line

    def _unexpected(self, message: str, index: int | None = None) -> UnexpectedContentError:
        index = self.pos if index is None else index
        return UnexpectedContentError(message, line_number_at(self.text, index), snippet_at(self.text, index))

    def _unsupported_directive(self, message: str, directive: str, index: int) -> UnsupportedShouldDirectiveError:
        return UnsupportedShouldDirectiveError(
            message,
            directive=directive,
            line=line_number_at(self.text, index),
            snippet=snippet_at(self.text, index),
        )


def parse(text: str) -> ParseResult:
    """Parse ``text`` with a fresh ``StructuralParser``."""
    return StructuralParser(text).parse()
