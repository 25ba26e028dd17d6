"""Tests for result formatters."""

import json

import pytest

from refmatch.cli.formatters import format_result
from refmatch.model.element import Region
from refmatch.model.match import MatchResult


@pytest.fixture
def found_result():
    """Create a found match result."""
    return MatchResult(Region(40, 40, 10, 10), score=0.98766, angle=90.0, threshold=0.9, name="ok")


@pytest.fixture
def missed_result():
    """Create a result below its threshold."""
    return MatchResult(Region(3, 4, 10, 10), score=0.5, angle=0.0, threshold=0.9)


def test_format_json(found_result):
    """Test JSON formatting."""
    output = format_result(found_result, "json")
    data = json.loads(output)

    assert data["found"] is True
    assert data["score"] == 0.98766
    assert data["center"] == [45, 45]
    assert data["name"] == "ok"


def test_format_text_found(found_result):
    """Test text formatting of a found result."""
    output = format_result(found_result, "text")

    assert output == "ok: FOUND at (40, 40) size 10x10 score=0.9877 threshold=0.9 angle=90"


def test_format_text_not_found(missed_result):
    """Test text formatting of a missed result."""
    output = format_result(missed_result, "text")

    assert output.startswith("NOT FOUND at (3, 4)")


def test_format_invalid(found_result):
    """Test invalid format raises error."""
    with pytest.raises(ValueError, match="Unknown format"):
        format_result(found_result, "xml")
