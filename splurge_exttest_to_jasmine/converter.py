"""Whole-file conversion of an Ext.Test source file to Jasmine.

``Converter.convert`` runs the complete pipeline over one input string:

1. parse the outer Suite or TestCase into a tree,
2. apply ``JasmineTransformVisitor`` to every code body,
3. write the tree with ``JasmineWriter``,
4. splice the result into the input in place of the original container, and
5. rewrite the JSHint ``/*global ... */`` header.

Apart from the globals header, text before and after the outer container
is kept verbatim. Any error aborts the conversion; nothing is returned in
that case.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
import re

from .context import ConverterConfig
from .jasmine_writer import JasmineWriter
from .parser import ParseResult, StructuralParser
from .transform_visitor import JasmineTransformVisitor

logger = logging.getLogger(__name__)

JSHINT_GLOBALS_RE = re.compile(r"/\*global (.*?)\s*\*/")

# globals only the Ext.Test/YUI harness needed
REMOVED_GLOBALS = ("Ext", "Y", "tests", "_")
JASMINE_GLOBALS = ("_", "describe", "beforeEach", "afterEach", "it", "expect")
TRAILING_GLOBALS = ("JsMockito",)


def convert_jshint_globals(text: str) -> str:
    """Rewrite the JSHint globals header for Jasmine.

    An existing header loses ``Ext``, ``Y`` and ``tests``, gains lodash and
    the Jasmine globals, and has ``JsMockito`` moved to the end. Without a
    header, one listing lodash and the Jasmine globals is prepended.
    """
    match = JSHINT_GLOBALS_RE.search(text)
    if match is None:
        return f"/*global {', '.join(JASMINE_GLOBALS)} */\n" + text

    names = [name for name in re.split(r",\s*", match.group(1)) if name and name not in REMOVED_GLOBALS]
    names.extend(JASMINE_GLOBALS)
    for trailing in TRAILING_GLOBALS:
        if trailing in names:
            names.remove(trailing)
            names.append(trailing)

    return text[: match.start()] + f"/*global {', '.join(names)} */" + text[match.end() :]


class Converter:
    """Convert Ext.Test source text to Jasmine source text.

    Args:
        config: Optional configuration; defaults to ``ConverterConfig()``.
    """

    def __init__(self, config: ConverterConfig | None = None) -> None:
        self.config = config or ConverterConfig()

    def convert(self, text: str) -> str:
        """Return the Jasmine version of ``text``.

        Raises:
            ConversionError: Any of the structural, assertion or directive
                errors; no partial output is produced.
        """
        parse_result = self.parse(text)
        tree = parse_result.tree

        tree.accept(JasmineTransformVisitor(self.config.fixture_name, self.config.mock_marker))

        indent_level = self.config.indent_level
        if indent_level is None:
            indent_level = parse_result.indent_level
        writer = JasmineWriter(self.config.indent_str, indent_level, self.config.fixture_name)
        output = writer.write(tree)

        line_count = output.count("\n") + 1
        logger.debug(f"Converted '{tree.name}' to {line_count} lines of Jasmine")
        converted = text[: parse_result.start_index] + output + text[parse_result.end_index :]
        if self.config.convert_jshint_globals:
            converted = convert_jshint_globals(converted)
        return converted

    def parse(self, text: str) -> ParseResult:
        return StructuralParser(text).parse()


def convert(text: str, config: ConverterConfig | None = None) -> str:
    """Convert one Ext.Test source file's text to Jasmine.

    Args:
        text: The whole input file.
        config: Optional converter configuration.

    Returns:
        The whole output file.
    """
    return Converter(config).convert(text)
