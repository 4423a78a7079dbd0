"""Tests for the file-level conversion API."""

from pathlib import Path

from splurge_exttest_to_jasmine import main
from splurge_exttest_to_jasmine.context import ConverterConfig
from splurge_exttest_to_jasmine.exceptions import ConversionError, NoOuterContainerError
from splurge_exttest_to_jasmine.helpers.path_utils import PathValidationError

SIMPLE_TEST = "tests.unit.add( {\n\tname : 'Simple',\n\ttestA : function() {\n\t\tY.Assert.isTrue( true );\n\t}\n} );\n"

SIMPLE_SPEC = (
    "/*global _, describe, beforeEach, afterEach, it, expect */\n"
    'describe( "unit.Simple", function() {\n'
    "\n"
    '\tit( "A", function() {\n'
    "\t\texpect( true ).toBe( true );\n"
    "\t} );\n"
    "\n"
    "} );\n"
)


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestMapOutputPaths:
    def test_recursive_mapping(self, tmp_path):
        src = tmp_path / "test"
        write(src / "ATest.js", "")
        write(src / "grid" / "BTest.js", "")
        write(src / "helper.js", "")

        mappings = main.map_output_paths(src, tmp_path / "spec", "*Test.js", "*Spec.js")

        assert mappings == {
            src / "ATest.js": tmp_path / "spec" / "ASpec.js",
            src / "grid" / "BTest.js": tmp_path / "spec" / "grid" / "BSpec.js",
        }

    def test_hidden_entries_are_skipped(self, tmp_path):
        src = tmp_path / "test"
        write(src / ".ATest.js", "")
        write(src / ".svn" / "BTest.js", "")
        write(src / "CTest.js", "")

        mappings = main.map_output_paths(src, tmp_path / "spec", "*Test.js", "*Spec.js")

        assert list(mappings) == [src / "CTest.js"]

    def test_directories_matching_the_mask_are_ignored(self, tmp_path):
        src = tmp_path / "test"
        (src / "DirTest.js").mkdir(parents=True)

        assert main.map_output_paths(src, tmp_path / "spec", "*Test.js", "*Spec.js") == {}


class TestConvertFile:
    def test_writes_target(self, tmp_path):
        source = write(tmp_path / "SimpleTest.js", SIMPLE_TEST)
        target = tmp_path / "out" / "SimpleSpec.js"

        result = main.convert_file(source, target)

        assert result.is_success()
        assert result.data == str(target)
        assert target.read_text(encoding="utf-8") == SIMPLE_SPEC
        assert result.metadata["generated_code"] == SIMPLE_SPEC

    def test_without_target_nothing_is_written(self, tmp_path):
        source = write(tmp_path / "SimpleTest.js", SIMPLE_TEST)

        result = main.convert_file(source)

        assert result.is_success()
        assert result.data == str(source)
        assert result.metadata["generated_code"] == SIMPLE_SPEC
        assert sorted(p.name for p in tmp_path.iterdir()) == ["SimpleTest.js"]

    def test_dry_run(self, tmp_path):
        source = write(tmp_path / "SimpleTest.js", SIMPLE_TEST)
        target = tmp_path / "SimpleSpec.js"

        result = main.convert_file(source, target, ConverterConfig(dry_run=True))

        assert result.is_success()
        assert not target.exists()

    def test_globals_header_can_be_left_alone(self, tmp_path):
        source = write(tmp_path / "SimpleTest.js", SIMPLE_TEST)
        target = tmp_path / "SimpleSpec.js"

        main.convert_file(source, target, ConverterConfig(convert_jshint_globals=False))

        assert target.read_text(encoding="utf-8").startswith('describe( "unit.Simple"')

    def test_missing_source(self, tmp_path):
        result = main.convert_file(tmp_path / "nope.js")

        assert result.is_error()
        assert isinstance(result.error, PathValidationError)

    def test_directory_source(self, tmp_path):
        result = main.convert_file(tmp_path)

        assert result.is_error()
        assert result.error.validation_type == "not_a_file"

    def test_conversion_error(self, tmp_path):
        source = write(tmp_path / "BadTest.js", "var a = 1;\n")

        result = main.convert_file(source, tmp_path / "BadSpec.js")

        assert result.is_error()
        assert isinstance(result.error, NoOuterContainerError)
        assert not (tmp_path / "BadSpec.js").exists()

    def test_undecodable_source(self, tmp_path):
        source = tmp_path / "BinTest.js"
        source.write_bytes(b"\xff\xfe\x00")

        result = main.convert_file(source)

        assert result.is_error()
        assert isinstance(result.error, UnicodeDecodeError)
        assert result.metadata["suggestions"]


class TestConvertPath:
    def test_single_file(self, tmp_path):
        source = write(tmp_path / "SimpleTest.js", SIMPLE_TEST)

        result = main.convert_path(source)

        assert result.is_success()
        assert result.data == [str(source)]
        assert result.metadata["generated_code"] == {str(source): SIMPLE_SPEC}

    def test_single_file_failure(self, tmp_path):
        source = write(tmp_path / "BadTest.js", "var a = 1;\n")

        result = main.convert_path(source)

        assert result.is_error()
        assert isinstance(result.error, NoOuterContainerError)

    def test_directory_requires_output(self, tmp_path):
        result = main.convert_path(tmp_path)

        assert result.is_error()
        assert isinstance(result.error, PathValidationError)

    def test_directory(self, tmp_path):
        write(tmp_path / "test" / "ATest.js", SIMPLE_TEST)
        write(tmp_path / "test" / "sub" / "BTest.js", SIMPLE_TEST)
        write(tmp_path / "test" / "readme.txt", "not a test")

        result = main.convert_path(tmp_path / "test", tmp_path / "spec")

        assert result.is_success()
        assert result.data == [str(tmp_path / "spec" / "ASpec.js"), str(tmp_path / "spec" / "sub" / "BSpec.js")]
        assert (tmp_path / "spec" / "sub" / "BSpec.js").read_text(encoding="utf-8") == SIMPLE_SPEC
        assert not (tmp_path / "spec" / "readme.txt").exists()
        assert result.metadata["failures"] == {}

    def test_custom_masks(self, tmp_path):
        write(tmp_path / "test" / "a.test.js", SIMPLE_TEST)
        config = ConverterConfig(input_mask="*.test.js", output_mask="*.spec.js")

        result = main.convert_path(tmp_path / "test", tmp_path / "spec", config)

        assert result.data == [str(tmp_path / "spec" / "a.spec.js")]

    def test_partial_failure_is_a_warning(self, tmp_path):
        write(tmp_path / "test" / "ATest.js", SIMPLE_TEST)
        write(tmp_path / "test" / "BTest.js", "var b;\n")
        write(tmp_path / "test" / "CTest.js", SIMPLE_TEST)

        result = main.convert_path(tmp_path / "test", tmp_path / "spec")

        assert result.is_warning()
        assert len(result.data) == 2
        assert list(result.metadata["failures"]) == [str(tmp_path / "test" / "BTest.js")]
        assert "BTest.js" in result.warnings[0]
        assert (tmp_path / "spec" / "CSpec.js").exists()

    def test_fail_fast_stops_at_first_failure(self, tmp_path):
        write(tmp_path / "test" / "ATest.js", "var a;\n")
        write(tmp_path / "test" / "BTest.js", SIMPLE_TEST)

        result = main.convert_path(tmp_path / "test", tmp_path / "spec", ConverterConfig(fail_fast=True))

        assert result.is_error()
        assert isinstance(result.error, NoOuterContainerError)
        assert not (tmp_path / "spec" / "BSpec.js").exists()

    def test_all_failures(self, tmp_path):
        write(tmp_path / "test" / "ATest.js", "var a;\n")

        result = main.convert_path(tmp_path / "test", tmp_path / "spec")

        assert result.is_error()
        assert isinstance(result.error, ConversionError)
        assert "All 1 file(s) failed" in str(result.error)

    def test_dry_run_writes_nothing(self, tmp_path):
        write(tmp_path / "test" / "ATest.js", SIMPLE_TEST)

        result = main.convert_path(tmp_path / "test", tmp_path / "spec", ConverterConfig(dry_run=True))

        assert result.is_success()
        assert not (tmp_path / "spec").exists()
        assert list(result.metadata["generated_code"].values()) == [SIMPLE_SPEC]
