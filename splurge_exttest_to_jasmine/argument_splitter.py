"""Split call argument text into its top-level argument expressions.

Regular expressions cannot split ``fn( a, b( 1, 2 ), [ 3, 4 ], "x,y" )``
correctly, so the text between the parentheses is walked one character
at a time. Brackets, literals and comments are skipped as whole regions
with the scanner, leaving only the commas that separate arguments.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from .scanner import BRACE_PAIRS, LITERAL_CHARS, is_comment_start, match_brace, match_comment, match_literal


def split_arguments(args_text: str) -> list[str]:
    """Split ``args_text`` on its top-level commas.

    Args:
        args_text: The text found between the parentheses of a call, for
            example ``"arg1, fn( 3, 4 ), [ a, b ], { c: d }"``.

    Returns:
        The argument expressions in order, each trimmed of surrounding
        whitespace. Empty input yields an empty list and a trailing comma
        does not produce an empty final argument.

    Raises:
        UnbalancedDelimiterError: If a bracket inside the text is unbalanced.
        UnterminatedLiteralError: If a literal inside the text is never closed.
    """
    args: list[str] = []
    start = 0
    index = 0
    length = len(args_text)

    while index < length:
        char = args_text[index]
        if char in BRACE_PAIRS:
            index = match_brace(args_text, index) + 1
            continue
        if char == "/" and is_comment_start(args_text, index):
            index = match_comment(args_text, index)
            continue
        if char in LITERAL_CHARS:
            index = match_literal(args_text, index) + 1
            continue
        if char == ",":
            args.append(args_text[start:index].strip())
            start = index + 1
        index += 1

    tail = args_text[start:].strip()
    if tail:
        args.append(tail)
    return args
