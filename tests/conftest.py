"""Shared test fixtures."""

import pytest

from notes_mcp.memory.parser import parse_entries
from tests.samples import RICH_DOC, SAMPLE_DOC


@pytest.fixture
def sample_entries():
    """Entries of the two-entry sample document."""
    return parse_entries(SAMPLE_DOC)


@pytest.fixture
def rich_entries():
    """Entries of the richer sample document."""
    return parse_entries(RICH_DOC)


@pytest.fixture
def memory_path(tmp_path):
    """Memory file populated with the richer sample document."""
    path = tmp_path / "memory.md"
    path.write_text(RICH_DOC, encoding="utf-8")
    return path
