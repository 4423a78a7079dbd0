"""Custom exception classes for the Ext.Test to Jasmine converter.

This module defines a small hierarchy of exceptions raised by the
scanner, the structural parser and the transformation pass. Every
exception carries a ``details`` mapping with structured context. The
structural errors also record the 1-based ``line`` and a short
``snippet`` of the input around the failure so callers can point the
user at the offending construct.

All conversion errors are fatal: a conversion that raises never
produces partial output.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from typing import Any


class ConversionError(Exception):
    """Base exception for conversion-related errors.

    Args:
        message: Human-readable error message.
        details: Optional mapping with structured diagnostic data.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class SourceLocationError(ConversionError):
    """Base class for errors that point at a location in the source text.

    Args:
        message: Human-readable error message.
        line: Optional 1-based line number where the error occurred.
        snippet: Optional text window around the failure position.
    """

    def __init__(self, message: str, line: int | None = None, snippet: str | None = None):
        details: dict[str, Any] = {}
        if line is not None:
            details["line"] = line
        if snippet is not None:
            details["snippet"] = snippet
        super().__init__(message, details)

    @property
    def line(self) -> int | None:
        return self.details.get("line")

    @property
    def snippet(self) -> str | None:
        return self.details.get("snippet")

    def relocate(self, line_offset: int) -> None:
        """Shift the recorded line number by ``line_offset`` lines.

        Used when the error was raised while scanning a detached piece of
        the input (for example a test body) so the reported line refers to
        the whole input instead.
        """
        if self.line is not None:
            self.details["line"] = self.line + line_offset

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        if self.snippet:
            return f"{self.message} (line {self.line}, near {self.snippet!r})"
        return f"{self.message} (line {self.line})"


class NoOuterContainerError(SourceLocationError):
    """Raised when the input holds no outer Suite or TestCase wrapper."""


class UnexpectedContentError(SourceLocationError):
    """Raised when the parser finds text it cannot place in the grammar."""


class UnbalancedDelimiterError(SourceLocationError):
    """Raised when an opening brace, bracket or parenthesis is never closed."""


class UnterminatedLiteralError(SourceLocationError):
    """Raised when a string or regular expression literal is never closed."""


class UnterminatedCommentError(SourceLocationError):
    """Raised when a ``/* ... */`` comment is never closed."""


class InvalidStartError(SourceLocationError):
    """Raised when a scanner routine is pointed at the wrong character."""


class UnsupportedAssertionError(SourceLocationError):
    """Raised for an assertion call that has no Jasmine translation.

    Args:
        message: Description of the unsupported call.
        namespace: Assertion namespace, for example ``ArrayAssert``.
        function: Assertion function name, for example ``isEmpty``.
        line: Optional 1-based line number of the call.
        snippet: Optional text window around the call.
    """

    def __init__(
        self,
        message: str,
        namespace: str | None = None,
        function: str | None = None,
        line: int | None = None,
        snippet: str | None = None,
    ):
        super().__init__(message, line, snippet)
        if namespace:
            self.details["namespace"] = namespace
        if function:
            self.details["function"] = function


class UnsupportedShouldDirectiveError(SourceLocationError):
    """Raised when a ``_should`` block holds a key or value that is not understood.

    Args:
        message: Description of the problem.
        directive: Optional directive key that caused the error.
        line: Optional 1-based line number.
        snippet: Optional text window around the directive.
    """

    def __init__(
        self, message: str, directive: str | None = None, line: int | None = None, snippet: str | None = None
    ):
        super().__init__(message, line, snippet)
        if directive:
            self.details["directive"] = directive


class ConfigurationError(ConversionError):
    """Raised when a converter configuration is invalid.

    Args:
        message: Human readable description of the configuration problem.
        config_key: Optional configuration key that caused the error.
    """

    def __init__(self, message: str, config_key: str | None = None):
        details: dict[str, Any] = {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
