"""
Test configuration for lockchart.

Trials fork real processes and take real locks, so every test that touches a
file gets its own file under tmp_path.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure tests import the local package, not a globally installed lockchart.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture
def target_file(tmp_path: Path) -> str:
    """A readable and writable regular file."""
    path = tmp_path / "target.dat"
    path.write_bytes(b"0123456789abcdef")
    path.chmod(0o666)
    return str(path)
