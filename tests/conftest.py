from __future__ import annotations

import json
from pathlib import Path

import pytest

TESTDATA = Path(__file__).parent / "testdata"


@pytest.fixture
def load_envelope():
    """Load a sample EventBridge envelope from tests/testdata."""

    def _load(name: str) -> dict:
        return json.loads((TESTDATA / name).read_text(encoding="utf-8"))

    return _load
