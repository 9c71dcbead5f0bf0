"""Pytest configuration — ensures the project root is importable."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))


@pytest.fixture(autouse=True)
def _clean_threshold_env(monkeypatch):
    """Keep DOC_CONSISTENCY_* overrides from the developer's shell out of tests."""
    for key in [
        "DOC_CONSISTENCY_NAME_MISMATCH",
        "DOC_CONSISTENCY_NAME_HIGH",
        "DOC_CONSISTENCY_ADDRESS_MISMATCH",
        "DOC_CONSISTENCY_ADDRESS_HIGH",
    ]:
        monkeypatch.delenv(key, raising=False)
    yield
