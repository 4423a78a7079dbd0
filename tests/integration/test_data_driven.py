"""Data-driven integration tests for Ext.Test to Jasmine conversion.

Each ``exttest_given_NN.js`` file under ``tests/data/given_and_expected``
is converted and compared with its ``jasmine_expected_NN.js`` partner.
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from splurge_exttest_to_jasmine import main
from splurge_exttest_to_jasmine.cli import app
from splurge_exttest_to_jasmine.converter import convert
from splurge_exttest_to_jasmine.exceptions import NoOuterContainerError

DATA_DIR = Path(__file__).resolve().parent.parent / "data" / "given_and_expected"


def get_test_pairs() -> list[tuple[Path, Path]]:
    pairs = []
    for given_file in sorted(DATA_DIR.glob("exttest_given_*.js")):
        number = given_file.stem.rsplit("_", 1)[-1]
        expected_file = DATA_DIR / f"jasmine_expected_{number}.js"
        if expected_file.exists():
            pairs.append((given_file, expected_file))
    return pairs


PAIRS = get_test_pairs()


def test_test_data_exists():
    assert len(PAIRS) >= 4


@pytest.mark.parametrize("given_file, expected_file", PAIRS, ids=[p[0].stem for p in PAIRS])
def test_convert_matches_expected(given_file, expected_file):
    given = given_file.read_text(encoding="utf-8")
    expected = expected_file.read_text(encoding="utf-8")

    assert convert(given) == expected


def test_directory_conversion_matches_expected(tmp_path):
    src = tmp_path / "test"
    src.mkdir()
    for index, (given_file, _) in enumerate(PAIRS):
        (src / f"Case{index}Test.js").write_text(given_file.read_text(encoding="utf-8"), encoding="utf-8")

    result = main.convert_path(src, tmp_path / "spec")

    assert result.is_success()
    for index, (_, expected_file) in enumerate(PAIRS):
        written = (tmp_path / "spec" / f"Case{index}Spec.js").read_text(encoding="utf-8")
        assert written == expected_file.read_text(encoding="utf-8")


def test_cli_round_trip_through_files(tmp_path):
    given_file, expected_file = PAIRS[0]
    target = tmp_path / "OuterSpec.js"

    result = CliRunner().invoke(app, ["convert", str(given_file), str(target)], catch_exceptions=False)

    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8") == expected_file.read_text(encoding="utf-8")


def test_converted_output_has_no_outer_container():
    _, expected_file = PAIRS[0]
    with pytest.raises(NoOuterContainerError):
        convert(expected_file.read_text(encoding="utf-8"))
