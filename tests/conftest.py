from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Generator, Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Configure structlog for test environment.

    Runs automatically for all tests so log output goes to stderr at
    WARNING level and never mixes with command output on stdout.
    """
    from minlog.logging import configure_logging

    configure_logging(level=logging.WARNING)
    yield


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test files.

    Also saves and restores the current working directory so tests that
    chdir into it do not affect other tests.
    """
    original_cwd = os.getcwd()
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
    os.chdir(original_cwd)


@pytest.fixture
def clean_env(tmp_path: Path) -> Generator[None, None, None]:
    """Remove all MINLOG_ environment variables and isolate the user config."""
    original_env = os.environ.copy()
    for key in list(os.environ.keys()):
        if key.startswith("MINLOG_"):
            del os.environ[key]
    # Keep ~/.config/minlog/config.yaml of the developer out of the tests
    os.environ["HOME"] = str(tmp_path / "home")
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def sample_config_yaml() -> str:
    """Return sample minlog.yaml content for testing."""
    return """
parser:
  operation_limit: 200
  max_depth: 8

evaluation:
  missing_setting: error

settings:
  beta: true
  banned: false

verbosity: info
"""
