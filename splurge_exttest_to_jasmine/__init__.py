"""splurge_exttest_to_jasmine package.

Submodules are imported lazily on attribute access so that importing the
package stays cheap and free of import cycles. ``from
splurge_exttest_to_jasmine import convert`` imports
``splurge_exttest_to_jasmine.converter`` on demand.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

__version__ = "2025.0.1"
__author__ = "Jim Schilling"
__description__ = "Automated Ext.Test/YUI Test to Jasmine conversion tool"

# Public API names. Submodules are imported lazily when accessed.
__all__ = [
    "main",
    "convert",
    "Converter",
    "convert_file",
    "convert_path",
    "ConverterConfig",
    "ContextManager",
    "Result",
    "ResultStatus",
    "StructuralParser",
    "ParseResult",
    "JasmineTransformVisitor",
    "JasmineWriter",
    "Suite",
    "TestCase",
    "DiTestCase",
    "Should",
    "SetUp",
    "TearDown",
    "Test",
    "HelperMethod",
    # Exceptions
    "ConversionError",
    "NoOuterContainerError",
    "UnexpectedContentError",
    "UnbalancedDelimiterError",
    "UnterminatedLiteralError",
    "UnterminatedCommentError",
    "UnsupportedAssertionError",
    "UnsupportedShouldDirectiveError",
    "InvalidStartError",
    "ConfigurationError",
]


def __getattr__(name: str):
    """Import the submodule defining ``name`` on first access."""
    import importlib

    mapping = {
        "main": "splurge_exttest_to_jasmine.main",
        "cli": "splurge_exttest_to_jasmine.cli",
        "convert": "splurge_exttest_to_jasmine.converter",
        "Converter": "splurge_exttest_to_jasmine.converter",
        "convert_file": "splurge_exttest_to_jasmine.main",
        "convert_path": "splurge_exttest_to_jasmine.main",
        "ConverterConfig": "splurge_exttest_to_jasmine.context",
        "ContextManager": "splurge_exttest_to_jasmine.context",
        "Result": "splurge_exttest_to_jasmine.result",
        "ResultStatus": "splurge_exttest_to_jasmine.result",
        "StructuralParser": "splurge_exttest_to_jasmine.parser",
        "ParseResult": "splurge_exttest_to_jasmine.parser",
        "JasmineTransformVisitor": "splurge_exttest_to_jasmine.transform_visitor",
        "JasmineWriter": "splurge_exttest_to_jasmine.jasmine_writer",
        "Suite": "splurge_exttest_to_jasmine.nodes",
        "TestCase": "splurge_exttest_to_jasmine.nodes",
        "DiTestCase": "splurge_exttest_to_jasmine.nodes",
        "Should": "splurge_exttest_to_jasmine.nodes",
        "SetUp": "splurge_exttest_to_jasmine.nodes",
        "TearDown": "splurge_exttest_to_jasmine.nodes",
        "Test": "splurge_exttest_to_jasmine.nodes",
        "HelperMethod": "splurge_exttest_to_jasmine.nodes",
        # Exceptions
        "ConversionError": "splurge_exttest_to_jasmine.exceptions",
        "NoOuterContainerError": "splurge_exttest_to_jasmine.exceptions",
        "UnexpectedContentError": "splurge_exttest_to_jasmine.exceptions",
        "UnbalancedDelimiterError": "splurge_exttest_to_jasmine.exceptions",
        "UnterminatedLiteralError": "splurge_exttest_to_jasmine.exceptions",
        "UnterminatedCommentError": "splurge_exttest_to_jasmine.exceptions",
        "UnsupportedAssertionError": "splurge_exttest_to_jasmine.exceptions",
        "UnsupportedShouldDirectiveError": "splurge_exttest_to_jasmine.exceptions",
        "InvalidStartError": "splurge_exttest_to_jasmine.exceptions",
        "ConfigurationError": "splurge_exttest_to_jasmine.exceptions",
    }

    if name not in mapping:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module = importlib.import_module(mapping[name])

    # 'main' and 'cli' are the modules themselves
    if name in {"main", "cli"}:
        return module

    return getattr(module, name)


def __dir__():
    return sorted(list(globals().keys()) + __all__)
