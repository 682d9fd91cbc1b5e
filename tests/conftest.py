"""Shared fixtures for license-notice tests."""

from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def testdata_dir() -> Path:
    """Directory holding the fixture license graphs and texts."""
    return Path(__file__).parent / "testdata"
