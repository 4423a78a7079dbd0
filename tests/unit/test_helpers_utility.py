"""Tests for the indentation helpers."""

import pytest

from splurge_exttest_to_jasmine.helpers.utility import (
    dedent_body,
    indent_level_of,
    remove_one_indent,
    strip_blank_edges,
)


def test_strip_blank_edges():
    assert strip_blank_edges("\n  \n\tcode();\n\t\n  ") == "\tcode();"


def test_strip_blank_edges_all_blank():
    assert strip_blank_edges(" \n\t\n") == ""


def test_dedent_body_removes_first_line_indent():
    body = "\n\t\t\tvar a = 1;\n\t\t\tif( a ) {\n\t\t\t\tb();\n\t\t\t}\n\t\t"
    assert dedent_body(body) == "var a = 1;\nif( a ) {\n\tb();\n}"


def test_dedent_body_keeps_less_indented_lines():
    body = "\t\tfirst();\n\tsecond();"
    assert dedent_body(body) == "first();\n\tsecond();"


def test_dedent_body_empties_whitespace_lines():
    body = "    a();\n      \n    b();"
    assert dedent_body(body) == "a();\n\nb();"


def test_dedent_body_is_idempotent():
    body = "\n\t\tx();\n\t\t\ty();\n"
    once = dedent_body(body)
    assert dedent_body(once) == once


def test_dedent_body_empty():
    assert dedent_body("") == ""
    assert dedent_body("\n\t\t\n") == ""


def test_remove_one_indent():
    assert remove_one_indent("\t\ta();\n\tb();\n    c();\nd();") == "\ta();\nb();\nc();\nd();"


@pytest.mark.parametrize(
    "whitespace, expected",
    [
        ("", 0),
        ("\t", 1),
        ("\t\t\t", 3),
        ("    ", 1),
        ("        ", 2),
        ("  ", 1),
        (" ", 0),
        ("      ", 2),
        ("\t    ", 2),
    ],
)
def test_indent_level_of(whitespace, expected):
    assert indent_level_of(whitespace) == expected
