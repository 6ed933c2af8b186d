"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add the src directory to Python path so tests can import without installing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(project_root / "src"))

from tests.fixtures import create_mock_connection, create_tool_context  # noqa: E402


@pytest.fixture
def mock_connection():
    """A ready connection manager whose generate calls return canned text."""
    return create_mock_connection()


@pytest.fixture
def tool_context(mock_connection):
    """Tool context wired to the mock connection."""
    return create_tool_context(mock_connection)
