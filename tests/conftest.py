import os
import sys
from pathlib import Path

import pytest

# Ensure the 'src' directory is on sys.path for imports in tests
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Pin the default engine regardless of the developer's environment
os.environ["MERKLE_HASH_ALGORITHM"] = "sha256"


@pytest.fixture
def scenario_a():
    return ["Hello", "world", "3", "4"]


@pytest.fixture
def scenario_b():
    return ["Hello", "world", "3"]


class CountingEngine:
    """Non-cryptographic stand-in that records how often it is called."""

    def __init__(self):
        self.calls = 0

    def hash(self, data: bytes) -> bytes:
        import zlib

        self.calls += 1
        return zlib.crc32(data).to_bytes(4, "big")


@pytest.fixture
def counting_engine():
    return CountingEngine()
