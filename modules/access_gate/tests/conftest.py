"""
Pytest fixtures for access gate tests.
"""
import pytest

from modules.mint_registry import MintRegistry


@pytest.fixture
def registry(tmp_path):
    registry = MintRegistry(tmp_path / "mints.json")
    registry.load()
    return registry
