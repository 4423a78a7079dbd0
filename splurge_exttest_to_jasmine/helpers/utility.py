"""Utility helpers for handling indentation in code bodies.

This module contains small, focused helpers used by the node classes, the
parser and the transform visitor: dedenting a captured function body,
removing a single indent unit and measuring the indent level of a leading
whitespace run.
"""

import re

_LEADING_WS_RE = re.compile(r"^[ \t]*")
_ONE_INDENT_RE = re.compile(r"^(?:\t| {4})", re.MULTILINE)


def strip_blank_edges(code: str) -> str:
    """Drop leading and trailing whitespace-only lines from ``code``.

    Trailing spaces and tabs on the final kept line are removed too.
    """
    lines = code.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    if lines:
        lines[-1] = lines[-1].rstrip()
    return "\n".join(lines)


def dedent_body(code: str) -> str:
    """Dedent a captured function body.

    Leading and trailing blank lines are stripped, then the indent of the
    first remaining line is removed from every line that starts with it.
    Lines holding only whitespace become empty. Applying the function to
    its own output returns the output unchanged.

    Args:
        code: Raw body text, usually everything between a function's braces.

    Returns:
        The dedented body.
    """
    code = strip_blank_edges(code)
    if not code:
        return ""

    lines = code.split("\n")
    indent = _LEADING_WS_RE.match(lines[0]).group(0)
    dedented: list[str] = []
    for line in lines:
        if not line.strip():
            dedented.append("")
        elif indent and line.startswith(indent):
            dedented.append(line[len(indent) :])
        else:
            dedented.append(line)
    return "\n".join(dedented)


def remove_one_indent(code: str) -> str:
    """Remove one tab or four spaces from the start of each line."""
    return _ONE_INDENT_RE.sub("", code)


def indent_level_of(whitespace: str) -> int:
    """Return the indent level represented by a leading whitespace run.

    Each tab counts as one level and each run of spaces counts as its
    length divided by four, rounded to the nearest level.
    """
    level = 0
    for run in re.findall(r"\t| +", whitespace):
        if run == "\t":
            level += 1
        else:
            # half-up rounding: two spaces count as one level
            level += int(len(run) / 4 + 0.5)
    return level
