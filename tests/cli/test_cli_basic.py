"""Basic tests for refmatch CLI commands."""

import json

import pytest
from click.testing import CliRunner

from refmatch import __version__
from refmatch.cli.main import EXIT_CONFIG_ERROR, EXIT_FOUND, EXIT_NOT_FOUND, EXIT_RUNTIME_ERROR, main
from tests.fixtures.frame_fixtures import SQUARE_COLOR, FrameBuilder, save_png


@pytest.fixture
def cli_runner():
    """Create CLI runner."""
    return CliRunner()


@pytest.fixture
def scene_files(tmp_path, square_scene):
    """Screenshot with a square at (40, 40) plus the square as a reference image."""
    frame_path = tmp_path / "screen.png"
    reference_path = tmp_path / "square.png"
    save_png(frame_path, square_scene.pixels)
    save_png(reference_path, square_scene.pixels[40:50, 40:50])
    return frame_path, reference_path


def test_cli_help(cli_runner):
    """Test that CLI help works."""
    result = cli_runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "refmatch CLI" in result.output


def test_cli_version(cli_runner):
    """Test that version command works."""
    result = cli_runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_match_command_help(cli_runner):
    """Test match command help."""
    result = cli_runner.invoke(main, ["match", "--help"])
    assert result.exit_code == 0
    assert "REFERENCE_PATH" in result.output


def test_match_found(cli_runner, scene_files):
    """Test a reference that is present in the screenshot."""
    frame_path, reference_path = scene_files

    result = cli_runner.invoke(main, ["match", str(frame_path), str(reference_path)])

    assert result.exit_code == EXIT_FOUND
    assert "FOUND at (40, 40)" in result.output
    assert "score=1.0000" in result.output


def test_match_json_output(cli_runner, scene_files):
    """Test machine-readable output."""
    frame_path, reference_path = scene_files

    result = cli_runner.invoke(
        main,
        [
            "match",
            str(frame_path),
            str(reference_path),
            "--format",
            "json",
            "--name",
            "square",
            "--color",
            "--rotation-step",
            "90",
            "--workers",
            "2",
        ],
    )

    assert result.exit_code == EXIT_FOUND
    payload = json.loads(result.stdout)
    assert payload["found"] is True
    assert payload["name"] == "square"
    assert payload["region"] == {"x": 40, "y": 40, "width": 10, "height": 10}
    assert payload["angle"] == 0.0


def test_match_not_found(cli_runner, tmp_path, scene_files):
    """Test a reference that is absent from the screenshot."""
    frame_path, _ = scene_files
    other_path = tmp_path / "other.png"
    save_png(other_path, FrameBuilder(10, 10, (250, 250, 250)).pixels)

    result = cli_runner.invoke(main, ["match", str(frame_path), str(other_path)])

    assert result.exit_code == EXIT_NOT_FOUND
    assert "NOT FOUND" in result.output


def test_match_absolute_metric(cli_runner, scene_files):
    """Test selecting the absolute difference metric."""
    frame_path, reference_path = scene_files

    result = cli_runner.invoke(
        main, ["match", str(frame_path), str(reference_path), "--metric", "absolute"]
    )

    assert result.exit_code == EXIT_FOUND


def test_match_invalid_threshold(cli_runner, scene_files):
    """Test that an out of range threshold is a configuration error."""
    frame_path, reference_path = scene_files

    result = cli_runner.invoke(
        main, ["match", str(frame_path), str(reference_path), "--threshold", "1.5"]
    )

    assert result.exit_code == EXIT_CONFIG_ERROR
    assert "threshold" in result.output


def test_match_mask_outside_reference(cli_runner, scene_files):
    """Test that a mask covering no pixels is a configuration error."""
    frame_path, reference_path = scene_files

    result = cli_runner.invoke(
        main,
        ["match", str(frame_path), str(reference_path), "--mask", "50,50 60,50 60,60"],
    )

    assert result.exit_code == EXIT_CONFIG_ERROR
    assert "mask" in result.output


def test_match_malformed_mask(cli_runner, scene_files):
    """Test that unparsable mask text is rejected by option parsing."""
    frame_path, reference_path = scene_files

    result = cli_runner.invoke(
        main, ["match", str(frame_path), str(reference_path), "--mask", "0,0 nope 9,9"]
    )

    assert result.exit_code == 2
    assert "invalid point" in result.output


def test_match_mask_with_semicolons(cli_runner, scene_files):
    """Test that semicolons separate mask points too."""
    frame_path, reference_path = scene_files

    result = cli_runner.invoke(
        main, ["match", str(frame_path), str(reference_path), "--mask", "0,0;9,0;9,9;0,9"]
    )

    assert result.exit_code == EXIT_FOUND


def test_match_reference_larger_than_frame(cli_runner, tmp_path, scene_files):
    """Test that an oversized reference is a configuration error."""
    frame_path, _ = scene_files
    big_path = tmp_path / "big.png"
    save_png(big_path, FrameBuilder(120, 10).square(0, 0, 5, SQUARE_COLOR).pixels)

    result = cli_runner.invoke(main, ["match", str(frame_path), str(big_path)])

    assert result.exit_code == EXIT_CONFIG_ERROR


def test_match_undecodable_reference(cli_runner, tmp_path, scene_files):
    """Test that a file that is not an image is a decode error."""
    frame_path, _ = scene_files
    garbage = tmp_path / "garbage.png"
    garbage.write_bytes(b"\x00\x01 not an image")

    result = cli_runner.invoke(main, ["match", str(frame_path), str(garbage)])

    assert result.exit_code == EXIT_RUNTIME_ERROR
    assert "Decode error" in result.output


def test_match_missing_file(cli_runner, tmp_path, scene_files):
    """Test that a missing file is rejected by argument parsing."""
    frame_path, _ = scene_files

    result = cli_runner.invoke(main, ["match", str(frame_path), str(tmp_path / "missing.png")])

    assert result.exit_code == 2
