"""Shared pytest configuration for SortedTreeLib tests."""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "slow: randomized stress tests (deselect with '-m \"not slow\"')"
    )
