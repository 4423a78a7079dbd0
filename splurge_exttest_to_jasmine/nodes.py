"""Tree model produced by the structural parser.

The tree mirrors how an Ext.Test file is organised: a ``Suite`` holds
nested suites and test cases, and a ``TestCase`` holds its optional
``SetUp``, ``TearDown`` and ``Should`` parts, its helper methods and its
``Test`` bodies. Names and hierarchy are fixed when the tree is built;
only the ``body`` of code-bearing nodes is rewritten afterwards.

Traversal follows the visitor pattern. ``Suite.accept`` visits the
suite and then every child automatically. ``TestCase.accept`` visits
only the test case itself, leaving its parts to be visited explicitly
by the visitor.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Union

from .helpers.utility import dedent_body


class NodeVisitor(ABC):
    """Interface for visitors walking the converter's tree.

    Every node variant has one required ``visit_*`` method. Helper
    methods are optional to visit and default to doing nothing.
    """

    @abstractmethod
    def visit_suite(self, node: Suite) -> None:
        pass

    @abstractmethod
    def visit_test_case(self, node: TestCase) -> None:
        pass

    @abstractmethod
    def visit_should(self, node: Should) -> None:
        pass

    @abstractmethod
    def visit_set_up(self, node: SetUp) -> None:
        pass

    @abstractmethod
    def visit_tear_down(self, node: TearDown) -> None:
        pass

    @abstractmethod
    def visit_test(self, node: Test) -> None:
        pass

    def visit_helper_method(self, node: HelperMethod) -> None:
        """Visit a helper method. Does nothing unless overridden."""


class Node(ABC):
    """Base class for all tree nodes."""

    @abstractmethod
    def accept(self, visitor: NodeVisitor) -> None:
        pass


class CodeNode(Node):
    """A node carrying a body of code.

    The body is dedented whenever it is set: leading and trailing blank
    lines are dropped and the indent of the first line is removed from
    every line, keeping the relative indent of nested code.

    Args:
        body: Raw body text.
        line: 1-based line in the original input where the body starts.
    """

    def __init__(self, body: str, line: int = 1) -> None:
        self.line = line
        self._body = dedent_body(body)

    @property
    def body(self) -> str:
        return self._body

    def set_body(self, body: str) -> None:
        self._body = dedent_body(body)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(line={self.line}, body={self._body!r})"


class SetUp(CodeNode):
    """Body of a test case's ``setUp()`` method."""

    def accept(self, visitor: NodeVisitor) -> None:
        visitor.visit_set_up(self)


class TearDown(CodeNode):
    """Body of a test case's ``tearDown()`` method."""

    def accept(self, visitor: NodeVisitor) -> None:
        visitor.visit_tear_down(self)


class Test(CodeNode):
    """A single test method.

    Args:
        name: The test's name. For ``test_foo`` methods this is the part
            after the ``test`` marker; for quoted ``"... should ..."``
            keys it is the whole phrase.
        body: Raw body text.
        line: 1-based line where the body starts.
    """

    __test__ = False  # keep pytest from collecting this class

    def __init__(self, name: str, body: str, line: int = 1) -> None:
        super().__init__(body, line)
        self.name = name

    def accept(self, visitor: NodeVisitor) -> None:
        visitor.visit_test(self)

    def __repr__(self) -> str:
        return f"Test(name={self.name!r}, line={self.line})"


class HelperMethod(CodeNode):
    """A non-test method of a test case, emitted as a plain function."""

    def __init__(self, name: str, args_list: str, body: str, line: int = 1) -> None:
        super().__init__(body, line)
        self.name = name
        self.args_list = args_list

    def accept(self, visitor: NodeVisitor) -> None:
        visitor.visit_helper_method(self)

    def __repr__(self) -> str:
        return f"HelperMethod(name={self.name!r}, args_list={self.args_list!r})"


@dataclass
class Should(Node):
    """The ``_should`` directives of a test case.

    Keys are expected to equal test names in the same test case, but this
    is not checked; a key naming no test simply has no effect.
    """

    ignored_tests: set[str] = field(default_factory=set)
    error_tests: dict[str, str] = field(default_factory=dict)

    def is_ignored(self, test_name: str) -> bool:
        return test_name in self.ignored_tests

    def expected_error(self, test_name: str) -> str | None:
        return self.error_tests.get(test_name)

    def accept(self, visitor: NodeVisitor) -> None:
        visitor.visit_should(self)


@dataclass
class TestCase(Node):
    """An Ext.Test test case."""

    __test__ = False

    name: str
    should: Should | None = None
    set_up: SetUp | None = None
    tear_down: TearDown | None = None
    tests: list[Test] = field(default_factory=list)
    helper_methods: list[HelperMethod] = field(default_factory=list)

    def accept(self, visitor: NodeVisitor) -> None:
        # parts are visited by the visitor itself, never here
        visitor.visit_test_case(self)


@dataclass
class DiTestCase(TestCase):
    """A test case created by directly instantiating an ``Ext.test.Case`` subclass.

    ``constructor_name`` is the dotted name of the subclass, for example
    ``app.controllers.SomeTest``. Its own ``setUp()`` and ``tearDown()``
    run before and after every test.
    """

    constructor_name: str = ""


@dataclass
class Suite(Node):
    """An Ext.Test suite holding nested suites and test cases."""

    name: str
    children: list[Union[Suite, TestCase]] = field(default_factory=list)

    def accept(self, visitor: NodeVisitor) -> None:
        visitor.visit_suite(self)
        for child in self.children:
            child.accept(visitor)


ContainerNode = Union[Suite, TestCase]
