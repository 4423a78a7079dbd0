"""Rewrite the code bodies of a parsed tree into Jasmine-ready code.

``JasmineTransformVisitor`` walks the tree and rewrites only the bodies of
code-bearing nodes; names and hierarchy are never touched. The individual
rewrites are plain functions so they can be used and tested on their own:

- ``rewrite_helper_calls``: ``this.helper(...)`` becomes ``helper(...)``
  for helper methods of the same test case.
- ``rewrite_self_references``: ``this.x`` becomes ``thisSuite.x``.
- ``remove_mock_try_catch``: a ``try``/``catch`` whose only purpose was to
  report a JsMockito verification failure is replaced by its try body.
- ``translate_assertions``: YUI ``Assert``, ``ArrayAssert`` and
  ``ObjectAssert`` calls become ``expect()`` expressions.
- ``remove_superclass_call``: drops the ``X.prototype.setUp.apply( this,
  arguments );`` line from setUp/tearDown of directly instantiated test
  cases, which call the superclass hooks themselves.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
import re
from collections.abc import Callable, Iterable

from .argument_splitter import split_arguments
from .exceptions import SourceLocationError, UnsupportedAssertionError
from .helpers.utility import remove_one_indent
from .nodes import CodeNode, DiTestCase, HelperMethod, NodeVisitor, SetUp, Should, Suite, TearDown, Test, TestCase
from .scanner import line_number_at, match_brace, snippet_at

logger = logging.getLogger(__name__)

DEFAULT_FIXTURE_NAME = "thisSuite"
DEFAULT_MOCK_MARKER = "JsMockito"
ERROR_MESSAGE_COMMENT = "  // orig YUI Test err msg: "

_SELF_REFERENCE_RE = re.compile(r"(?<![\w$])this\.(?=[A-Za-z_$])")
_TRY_RE = re.compile(r"^[ \t]*(try)\s*\{", re.MULTILINE)
_CATCH_RE = re.compile(r"\s*catch\s*\([^)]*\)\s*\{")
_SUPERCLASS_CALL_RE = re.compile(
    r"^[ \t]*.*?\.prototype\.(?:setUp|tearDown)\.apply\(\s*this\s*,\s*arguments\s*\);[ \t]*\r?\n?",
    re.MULTILINE,
)
_ASSERT_CALL_RE = re.compile(r"(?<![\w$.])(?:Y\.)?(\w*Assert)\.(\w+)\s*\(")
_STATEMENT_END_RE = re.compile(r"[ \t]*;")


def _expect(actual: str, matcher: str, expected: str) -> str:
    return f"expect( {actual} ).{matcher}( {expected} );"


def _has_own_property_keys(args: list[str]) -> str:
    keys = args[0]
    if not (keys.startswith("[") and keys.endswith("]")):
        raise ValueError("expected an array literal of keys")
    return "".join(_expect(f"{args[1]}.hasOwnProperty( {key} )", "toBe", "true") for key in split_arguments(keys[1:-1]))


# namespace -> function -> (number of required arguments, translation)
ASSERTION_TABLE: dict[str, dict[str, tuple[int, Callable[[list[str]], str]]]] = {
    "Assert": {
        "isTrue": (1, lambda a: _expect(a[0], "toBe", "true")),
        "isFalse": (1, lambda a: _expect(a[0], "toBe", "false")),
        "isNull": (1, lambda a: _expect(a[0], "toBe", "null")),
        "isNotNull": (1, lambda a: _expect(a[0], "not.toBe", "null")),
        "isUndefined": (1, lambda a: _expect(f"_.isUndefined( {a[0]} )", "toBe", "true")),
        "isString": (1, lambda a: _expect(f"_.isString( {a[0]} )", "toBe", "true")),
        "isObject": (1, lambda a: _expect(f"_.isObject( {a[0]} )", "toBe", "true")),
        "isArray": (1, lambda a: _expect(f"_.isArray( {a[0]} )", "toBe", "true")),
        "isNaN": (1, lambda a: _expect(f"isNaN( {a[0]} )", "toBe", "true")),
        "isInstanceOf": (2, lambda a: _expect(f"{a[1]} instanceof {a[0]}", "toBe", "true")),
        "areSame": (2, lambda a: _expect(a[1], "toBe", a[0])),
        "areNotSame": (2, lambda a: _expect(a[1], "not.toBe", a[0])),
        "areEqual": (2, lambda a: _expect(a[1], "toEqual", a[0])),
        "areNotEqual": (2, lambda a: _expect(a[1], "not.toEqual", a[0])),
        "fail": (0, lambda a: _expect("true", "toBe", "false")),
    },
    "ArrayAssert": {
        "contains": (2, lambda a: _expect(a[1], "toContain", a[0])),
        "doesNotContain": (2, lambda a: _expect(a[1], "not.toContain", a[0])),
        "containsItems": (2, lambda a: _expect(f"_.intersection( {a[0]}, {a[1]} ).length", "toBe", f"{a[0]}.length")),
        "itemsAreSame": (2, lambda a: _expect(a[1], "toEqual", a[0])),
        "isEmpty": (1, lambda a: _expect(a[0], "toEqual", "[]")),
    },
    "ObjectAssert": {
        "hasKey": (2, lambda a: _expect(f"{a[1]}.hasOwnProperty( {a[0]} )", "toBe", "true")),
        "hasKeys": (2, _has_own_property_keys),
        "ownsKeys": (2, _has_own_property_keys),
    },
}


def rewrite_self_references(code: str, fixture_name: str = DEFAULT_FIXTURE_NAME) -> str:
    """Replace ``this.`` member accesses with ``<fixture_name>.``.

    Identifiers that merely end in ``this`` (``isthis.x``) are left alone.
    """
    return _SELF_REFERENCE_RE.sub(f"{fixture_name}.", code)


def rewrite_helper_calls(code: str, helper_names: Iterable[str]) -> str:
    """Turn ``this.name``, ``me.name`` and ``self.name`` into ``name`` for each helper."""
    for name in helper_names:
        code = re.sub(rf"(?<![\w$])(?:this|me|self)\.{re.escape(name)}(?![A-Za-z0-9_$])", name, code)
    return code


def remove_superclass_call(code: str) -> str:
    return _SUPERCLASS_CALL_RE.sub("", code, count=1)


def remove_mock_try_catch(code: str, mock_marker: str = DEFAULT_MOCK_MARKER) -> str:
    """Unwrap ``try``/``catch`` blocks whose try body mentions ``mock_marker``.

    The try body replaces the whole construct, dedented by one indent unit
    and stripped of leading and trailing line breaks. Blocks without the
    marker are left verbatim. Scanning resumes just past the ``try``
    keyword each time so neighbouring blocks are never skipped.
    """
    pos = 0
    while True:
        match = _TRY_RE.search(code, pos)
        if match is None:
            return code

        keyword_index = match.start(1)
        try_open = match.end() - 1
        try_close = match_brace(code, try_open)
        try_body = code[try_open + 1 : try_close]

        if mock_marker in try_body:
            catch = _CATCH_RE.match(code, try_close + 1)
            if catch is not None:
                catch_close = match_brace(code, catch.end() - 1)
                unwrapped = remove_one_indent(try_body).strip("\r\n")
                code = code[: match.start()] + unwrapped + code[catch_close + 1 :]
                logger.debug(f"Removed try/catch around {mock_marker} call at index {match.start()}")

        pos = keyword_index + 3


def translate_assertion(namespace: str, function: str, args: list[str]) -> str:
    """Translate a single assertion call into its ``expect()`` form.

    Args:
        namespace: Assertion namespace such as ``Assert`` or ``ArrayAssert``.
        function: Assertion function such as ``areSame``.
        args: The call's argument expressions.

    Returns:
        The expectation statement, followed by a comment holding the
        original failure message when one was passed.

    Raises:
        UnsupportedAssertionError: For an unknown namespace or function, or
            a call with too few arguments.
    """
    functions = ASSERTION_TABLE.get(namespace)
    if functions is None:
        raise UnsupportedAssertionError(
            f"Unknown assertion namespace '{namespace}'", namespace=namespace, function=function
        )
    entry = functions.get(function)
    if entry is None:
        raise UnsupportedAssertionError(
            f"Unknown function '{function}' in assertion namespace '{namespace}'",
            namespace=namespace,
            function=function,
        )

    arity, translate = entry
    if len(args) < arity:
        raise UnsupportedAssertionError(
            f"{namespace}.{function}() needs at least {arity} argument(s), got {len(args)}",
            namespace=namespace,
            function=function,
        )
    try:
        expectation = translate(args)
    except ValueError as exc:
        raise UnsupportedAssertionError(
            f"Cannot translate {namespace}.{function}(): {exc}", namespace=namespace, function=function
        ) from exc

    if len(args) > arity:
        expectation += ERROR_MESSAGE_COMMENT + args[arity]
    return expectation


def translate_assertions(code: str) -> str:
    """Translate every recognised assertion call in ``code``.

    Calls are written ``Y.Namespace.fn( ... );`` or ``Namespace.fn( ... );``
    where the namespace ends in ``Assert``. Other YUI calls such as
    ``Y.Mock.verify()`` or ``Y.Object.keys()`` are left untouched.

    Raises:
        UnsupportedAssertionError: For a call with no translation. The
            error's line is relative to ``code``.
    """
    pos = 0
    while True:
        match = _ASSERT_CALL_RE.search(code, pos)
        if match is None:
            return code

        namespace, function = match.group(1), match.group(2)
        paren_open = match.end() - 1
        paren_close = match_brace(code, paren_open)
        try:
            replacement = translate_assertion(namespace, function, split_arguments(code[paren_open + 1 : paren_close]))
        except UnsupportedAssertionError as exc:
            exc.details["line"] = line_number_at(code, match.start())
            exc.details["snippet"] = snippet_at(code, match.start())
            raise

        end = paren_close + 1
        statement_end = _STATEMENT_END_RE.match(code, end)
        if statement_end is not None:
            end = statement_end.end()

        code = code[: match.start()] + replacement + code[end:]
        pos = match.start() + len(replacement)


class JasmineTransformVisitor(NodeVisitor):
    """Visitor applying the Jasmine rewrites to every code body of a tree.

    ``Suite`` nodes recurse into their children on their own. ``TestCase``
    nodes do not, so ``visit_test_case`` visits the test case's parts
    explicitly after recording the names of its helper methods.

    Args:
        fixture_name: Name of the shared fixture variable replacing ``this``.
        mock_marker: Text identifying a mock verification inside a try block.
    """

    def __init__(self, fixture_name: str = DEFAULT_FIXTURE_NAME, mock_marker: str = DEFAULT_MOCK_MARKER) -> None:
        self.fixture_name = fixture_name
        self.mock_marker = mock_marker
        self._helper_names: list[str] = []

    def visit_suite(self, node: Suite) -> None:
        logger.debug(f"Transforming suite '{node.name}'")

    def visit_test_case(self, node: TestCase) -> None:
        logger.debug(f"Transforming test case '{node.name}'")
        self._helper_names = [helper.name for helper in node.helper_methods]

        if isinstance(node, DiTestCase):
            for hook in (node.set_up, node.tear_down):
                if hook is not None:
                    self._rewrite(hook, remove_superclass_call)

        if node.should is not None:
            node.should.accept(self)
        if node.set_up is not None:
            node.set_up.accept(self)
        if node.tear_down is not None:
            node.tear_down.accept(self)
        for helper in node.helper_methods:
            helper.accept(self)
        for test in node.tests:
            test.accept(self)

    def visit_should(self, node: Should) -> None:
        pass

    def visit_set_up(self, node: SetUp) -> None:
        self._rewrite(node, self._helper_calls, self._self_references)

    def visit_tear_down(self, node: TearDown) -> None:
        self._rewrite(node, self._helper_calls, self._self_references)

    def visit_helper_method(self, node: HelperMethod) -> None:
        self._rewrite_test_code(node)

    def visit_test(self, node: Test) -> None:
        self._rewrite_test_code(node)

    def _rewrite_test_code(self, node: CodeNode) -> None:
        self._rewrite(node, self._helper_calls, self._self_references, self._mock_try_catch, translate_assertions)

    def _helper_calls(self, code: str) -> str:
        return rewrite_helper_calls(code, self._helper_names)

    def _self_references(self, code: str) -> str:
        return rewrite_self_references(code, self.fixture_name)

    def _mock_try_catch(self, code: str) -> str:
        return remove_mock_try_catch(code, self.mock_marker)

    @staticmethod
    def _rewrite(node: CodeNode, *steps: Callable[[str], str]) -> None:
        body = node.body
        try:
            for step in steps:
                body = step(body)
        except SourceLocationError as exc:
            # body line 1 is node.line in the whole input
            exc.relocate(node.line - 1)
            raise
        node.set_body(body)
