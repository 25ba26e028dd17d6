"""Pytest configuration and fixtures."""

import os

import pytest

from refmatch.config import reset_settings

from tests.fixtures.frame_fixtures import (  # noqa: F401
    square_frame,
    square_reference,
    square_scene,
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Give every test default settings, unaffected by the caller's environment."""
    for key in list(os.environ):
        if key.startswith("REFMATCH_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for test files."""
    return tmp_path
