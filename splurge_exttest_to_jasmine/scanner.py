"""Brace, literal and comment matching over raw JavaScript text.

The converter never builds a full JavaScript grammar. Instead every
structural decision is made by walking the text from a known opening
character to its balanced counterpart while skipping string literals,
regular expression literals and comments, so that delimiters appearing
inside those regions are never mistaken for structure.

A bare ``/`` is ambiguous between division and the start of a regular
expression literal. It is always treated as a regular expression here,
which suits test code where division is rare.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from .exceptions import (
    InvalidStartError,
    UnbalancedDelimiterError,
    UnterminatedCommentError,
    UnterminatedLiteralError,
)

BRACE_PAIRS = {"{": "}", "[": "]", "(": ")"}
QUOTE_CHARS = ("'", '"')
LITERAL_CHARS = ("'", '"', "/")

SNIPPET_RADIUS = 20


def line_number_at(text: str, index: int) -> int:
    """Return the 1-based line number of ``index`` within ``text``."""
    index = max(0, min(index, len(text)))
    return text.count("\n", 0, index) + 1


def snippet_at(text: str, index: int, radius: int = SNIPPET_RADIUS) -> str:
    """Return a short window of ``text`` centred on ``index``."""
    start = max(0, index - radius)
    return text[start : index + radius]


def is_comment_start(text: str, index: int) -> bool:
    """Return True when a ``//`` or ``/*`` sequence begins at ``index``."""
    return text.startswith("//", index) or text.startswith("/*", index)


def match_brace(text: str, open_index: int) -> int:
    """Find the balanced closing counterpart of a brace.

    Args:
        text: Source text to scan.
        open_index: Index of a ``{``, ``[`` or ``(`` character.

    Returns:
        Index of the matching ``}``, ``]`` or ``)``.

    Raises:
        InvalidStartError: If ``text[open_index]`` is not an opening brace.
        UnbalancedDelimiterError: If the end of the text is reached first.
        UnterminatedLiteralError: If a skipped literal is never closed.
        UnterminatedCommentError: If a skipped block comment is never closed.
    """
    open_char = text[open_index : open_index + 1]
    close_char = BRACE_PAIRS.get(open_char)
    if close_char is None:
        raise InvalidStartError(
            f"Expected an opening brace at index {open_index}, found {open_char!r}",
            line_number_at(text, open_index),
            snippet_at(text, open_index),
        )

    depth = 1
    index = open_index + 1
    length = len(text)
    while index < length:
        char = text[index]
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return index
        elif char == "/":
            if is_comment_start(text, index):
                index = match_comment(text, index)
                continue
            index = match_literal(text, index)
        elif char in QUOTE_CHARS:
            index = match_literal(text, index)
        index += 1

    raise UnbalancedDelimiterError(
        f"No match for {open_char!r} before end of input",
        line_number_at(text, open_index),
        snippet_at(text, open_index),
    )


def match_literal(text: str, open_index: int) -> int:
    """Find the closing delimiter of a string or regular expression literal.

    A backslash escapes the character that follows it, so an escaped
    delimiter never closes the literal.

    Args:
        text: Source text to scan.
        open_index: Index of a ``'``, ``"`` or ``/`` character.

    Returns:
        Index of the closing delimiter.

    Raises:
        InvalidStartError: If ``text[open_index]`` is not a literal delimiter.
        UnterminatedLiteralError: If the end of the text is reached first.
    """
    delimiter = text[open_index : open_index + 1]
    if delimiter not in LITERAL_CHARS:
        raise InvalidStartError(
            f"Expected a string or regex delimiter at index {open_index}, found {delimiter!r}",
            line_number_at(text, open_index),
            snippet_at(text, open_index),
        )

    index = open_index + 1
    length = len(text)
    while index < length:
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == delimiter:
            return index
        index += 1

    raise UnterminatedLiteralError(
        f"Literal opened with {delimiter!r} is never closed",
        line_number_at(text, open_index),
        snippet_at(text, open_index),
    )


def match_comment(text: str, open_index: int) -> int:
    """Find the end of a comment.

    For a ``//`` comment the index of the terminating line break is
    returned (or the length of the text when the comment runs to the end).
    For a ``/* ... */`` comment the index just past the closing ``*/`` is
    returned.

    Raises:
        InvalidStartError: If no comment starts at ``open_index``.
        UnterminatedCommentError: If a block comment has no closing ``*/``.
    """
    if not is_comment_start(text, open_index):
        raise InvalidStartError(
            f"Expected a comment at index {open_index}, found {text[open_index : open_index + 2]!r}",
            line_number_at(text, open_index),
            snippet_at(text, open_index),
        )

    if text[open_index + 1] == "/":
        newline = text.find("\n", open_index + 2)
        return len(text) if newline == -1 else newline

    close = text.find("*/", open_index + 2)
    if close == -1:
        raise UnterminatedCommentError(
            "Block comment is never closed",
            line_number_at(text, open_index),
            snippet_at(text, open_index),
        )
    return close + 2


def skip_whitespace_and_comments(text: str, index: int) -> int:
    """Return the first index at or after ``index`` that is neither whitespace nor comment."""
    length = len(text)
    while index < length:
        if text[index].isspace():
            index += 1
        elif is_comment_start(text, index):
            index = match_comment(text, index)
        else:
            break
    return index


def strip_comments(text: str) -> str:
    """Remove comments from ``text`` while leaving literals untouched.

    Line breaks inside removed block comments are kept so that line
    numbers computed on the result still match the original text.
    """
    parts: list[str] = []
    start = 0
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char == "/" and is_comment_start(text, index):
            parts.append(text[start:index])
            end = match_comment(text, index)
            parts.append("\n" * text.count("\n", index, end) if text[index + 1] == "*" else "")
            index = start = end
            continue
        if char in LITERAL_CHARS:
            index = match_literal(text, index)
        index += 1
    parts.append(text[start:])
    return "".join(parts)
