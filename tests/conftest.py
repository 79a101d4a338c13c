# ============================================================================
# LogTree - Test Configuration and Fixtures
#
# Purpose: Shared pytest fixtures for testing
# Inputs: None
# Outputs: Fixtures for use in tests
# Dependencies: pytest, LogTree
# Usage: pytest tests/ (fixtures are automatically available)
#
# Changelog:
#   2026-09-02: Registry reset around every test
#   2026-09-18: read_lines helper fixture for file sink assertions
# ============================================================================

import os
from pathlib import Path
from typing import Callable, Generator, List

import pytest

from LogTree.config import Config
from LogTree.registry import ModuleRegistry, reset_registry


@pytest.fixture(autouse=True)
def fresh_registry(monkeypatch):
    """Give every test its own process registry built from plain defaults."""
    for key in [k for k in os.environ if k.startswith("LOGTREE_")]:
        monkeypatch.delenv(key, raising=False)
    reset_registry(Config())
    yield
    reset_registry()


@pytest.fixture
def registry() -> Generator[ModuleRegistry, None, None]:
    """A private registry, independent of the process one."""
    reg = ModuleRegistry(Config())
    yield reg
    reg.shutdown()


@pytest.fixture
def read_lines() -> Callable[[Path], List[str]]:
    """Read a log file as a list of lines (no trailing newlines)."""

    def _read(path: Path) -> List[str]:
        return Path(path).read_text(encoding="utf-8").splitlines()

    return _read
