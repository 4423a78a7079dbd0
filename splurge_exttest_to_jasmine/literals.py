"""Literal-only evaluation of JavaScript object and array literals.

``_should`` blocks are written as JavaScript object literals. They are
read here without executing anything: only objects, arrays, quoted
strings, booleans, ``null`` and numbers are accepted. Identifiers,
function calls and any other expression are rejected.

String values are returned with their escape sequences left as written,
so that a message copied into the generated Jasmine source reads exactly
as it did in the original test.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import re
from typing import Any

from .argument_splitter import split_arguments
from .exceptions import UnsupportedShouldDirectiveError
from .scanner import QUOTE_CHARS, line_number_at, match_brace, match_literal, snippet_at, strip_comments

_NUMBER_RE = re.compile(r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_IDENTIFIER_KEY_RE = re.compile(r"[A-Za-z_$][\w$]*")


class LiteralReader:
    """Read a literal from a piece of source text.

    Args:
        text: Source text holding exactly one literal (surrounding
            whitespace and comments are allowed).
    """

    def __init__(self, text: str) -> None:
        self.text = strip_comments(text)

    def read(self) -> Any:
        """Return the Python value of the literal.

        Raises:
            UnsupportedShouldDirectiveError: If the text is not a plain literal.
        """
        return self._read_value(self.text, 0)

    def _fail(self, message: str, offset: int) -> UnsupportedShouldDirectiveError:
        return UnsupportedShouldDirectiveError(
            message, line=line_number_at(self.text, offset), snippet=snippet_at(self.text, offset)
        )

    def _read_value(self, source: str, offset: int) -> Any:
        stripped = source.strip()
        offset += len(source) - len(source.lstrip())
        if not stripped:
            raise self._fail("Expected a literal value", offset)

        first = stripped[0]
        if first in "{[":
            close = match_brace(stripped, 0)
            if stripped[close + 1 :].strip():
                raise self._fail("Unexpected text after literal", offset + close + 1)
            inner = stripped[1:close]
            if first == "{":
                return self._read_object(inner, offset + 1)
            return [self._read_value(item, offset + 1) for item in split_arguments(inner)]

        if first in QUOTE_CHARS:
            close = match_literal(stripped, 0)
            if close != len(stripped) - 1:
                raise self._fail("Unexpected text after string literal", offset + close + 1)
            return stripped[1:close]

        if stripped == "true":
            return True
        if stripped == "false":
            return False
        if stripped == "null":
            return None
        if _NUMBER_RE.fullmatch(stripped):
            number = float(stripped)
            return int(number) if number.is_integer() and "." not in stripped else number

        raise self._fail(f"Only literal values are allowed, found {stripped!r}", offset)

    def _read_object(self, inner: str, offset: int) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for entry in split_arguments(inner):
            key, value_text = self._split_entry(entry, offset)
            result[key] = self._read_value(value_text, offset)
        return result

    def _split_entry(self, entry: str, offset: int) -> tuple[str, str]:
        if entry[:1] in QUOTE_CHARS:
            close = match_literal(entry, 0)
            key = entry[1:close]
            rest = entry[close + 1 :].lstrip()
        else:
            match = _IDENTIFIER_KEY_RE.match(entry)
            if match is None:
                raise self._fail(f"Invalid object key in {entry!r}", offset)
            key = match.group(0)
            rest = entry[match.end() :].lstrip()

        if not rest.startswith(":"):
            raise self._fail(f"Expected ':' after key {key!r}", offset)
        return key, rest[1:]


def read_literal(text: str) -> Any:
    """Convenience wrapper returning ``LiteralReader(text).read()``."""
    return LiteralReader(text).read()
