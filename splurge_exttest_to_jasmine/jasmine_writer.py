"""Serialize a (transformed) tree into Jasmine source text.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import re

from .nodes import ContainerNode, DiTestCase, HelperMethod, SetUp, Should, Suite, TearDown, Test, TestCase

_UNESCAPED_DOUBLE_QUOTE_RE = re.compile(r'(?<!\\)"')


def _quote(text: str) -> str:
    """Wrap ``text`` in double quotes, escaping bare double quotes inside it."""
    return '"' + _UNESCAPED_DOUBLE_QUOTE_RE.sub(r'\\"', text) + '"'


class JasmineWriter:
    """Write ``describe``/``it`` source for a Suite or TestCase tree.

    Blank separator lines are emitted without indentation.

    Args:
        indent_str: Text of one indent unit.
        indent_level: Indent level of the outermost ``describe`` line.
        fixture_name: Name of the shared fixture variable.
    """

    def __init__(self, indent_str: str = "\t", indent_level: int = 0, fixture_name: str = "thisSuite") -> None:
        self.indent_str = indent_str
        self.indent_level = indent_level
        self.fixture_name = fixture_name
        self._lines: list[str] = []
        self._level = indent_level

    def write(self, node: ContainerNode) -> str:
        """Return the Jasmine source for ``node``.

        Raises:
            TypeError: If ``node`` is neither a ``Suite`` nor a ``TestCase``.
        """
        self._lines = []
        self._level = self.indent_level
        if isinstance(node, Suite):
            self._write_suite(node)
        elif isinstance(node, TestCase):
            self._write_test_case(node)
        else:
            raise TypeError(f"Expected a Suite or TestCase node, got {type(node).__name__}")
        return "\n".join(self._lines)

    def _emit(self, text: str = "") -> None:
        indent = self.indent_str * self._level
        for line in text.split("\n"):
            self._lines.append(indent + line if line else "")

    def _write_suite(self, suite: Suite) -> None:
        self._emit(f"describe( {_quote(suite.name)}, function() {{")
        self._level += 1
        for child in suite.children:
            self._emit()
            if isinstance(child, Suite):
                self._write_suite(child)
            else:
                self._write_test_case(child)
            self._emit()
        self._level -= 1
        self._emit("} );")

    def _write_test_case(self, test_case: TestCase) -> None:
        self._emit(f"describe( {_quote(test_case.name)}, function() {{")
        self._level += 1

        if isinstance(test_case, DiTestCase):
            # the subclass's own setUp()/tearDown() must always run
            self._write_set_up(test_case.set_up or SetUp(""), test_case)
            self._emit()
            self._write_tear_down(test_case.tear_down or TearDown(""), test_case)
            self._emit()
        else:
            if test_case.set_up is not None:
                self._write_set_up(test_case.set_up, test_case)
                self._emit()
            if test_case.tear_down is not None:
                self._write_tear_down(test_case.tear_down, test_case)
                self._emit()

        for helper in test_case.helper_methods:
            self._emit()
            self._write_helper_method(helper)
            self._emit()

        for test in test_case.tests:
            self._emit()
            self._write_test(test, test_case.should)
            self._emit()

        self._level -= 1
        self._emit("} );")

    def _write_set_up(self, set_up: SetUp, test_case: TestCase) -> None:
        self._emit(f"var {self.fixture_name};")
        self._emit()
        self._emit("beforeEach( function() {")
        self._level += 1
        if isinstance(test_case, DiTestCase):
            self._emit(f"{self.fixture_name} = new {test_case.constructor_name}();")
            self._emit(f"{self.fixture_name}.setUp();")
        else:
            self._emit(f"{self.fixture_name} = {{}};")
        if set_up.body:
            self._emit()
            self._emit(set_up.body)
        self._level -= 1
        self._emit("} );")

    def _write_tear_down(self, tear_down: TearDown, test_case: TestCase) -> None:
        self._emit("afterEach( function() {")
        self._level += 1
        if isinstance(test_case, DiTestCase):
            if tear_down.body:
                self._emit(tear_down.body)
                self._emit()
            self._emit(f"{self.fixture_name}.tearDown();")
        elif tear_down.body:
            self._emit(tear_down.body)
        self._level -= 1
        self._emit("} );")

    def _write_helper_method(self, helper: HelperMethod) -> None:
        self._emit(f"function {helper.name}({helper.args_list}) {{")
        self._level += 1
        if helper.body:
            self._emit(helper.body)
        self._level -= 1
        self._emit("}")

    def _write_test(self, test: Test, should: Should | None) -> None:
        ignored = should is not None and should.is_ignored(test.name)
        expected_error = should.expected_error(test.name) if should is not None else None

        self._emit(f"{'xit' if ignored else 'it'}( {_quote(test.name)}, function() {{")
        self._level += 1
        if expected_error is not None:
            self._emit("expect( function() {")
            self._level += 1
            if test.body:
                self._emit(test.body)
            self._level -= 1
            self._emit(f"}} ).toThrow( {_quote(expected_error)} );")
        elif test.body:
            self._emit(test.body)
        self._level -= 1
        self._emit("} );")
