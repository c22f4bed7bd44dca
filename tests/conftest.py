"""Test configuration and fixtures for treegenius."""

import asyncio

import pytest

from treegenius.config import TreeConfig
from treegenius.controller import run_pass
from treegenius.types import PathEntry


@pytest.fixture
def scenario_entries():
    """Entries of the reference scenario: one ignored .git entry among two files."""
    return [
        PathEntry("root/a.txt", 10),
        PathEntry("root/sub/b.txt", 20),
        PathEntry("root/sub/.git/x", 5),
    ]


@pytest.fixture
def render():
    """Run a full pass synchronously and return (text, statistics)."""

    def _render(entries, root_name="root", **options):
        config = TreeConfig(**options)
        result = asyncio.run(run_pass(entries, root_name, config))
        return result.text, result.statistics

    return _render
