from __future__ import annotations

import pytest

from kissing import runtime
from kissing.config import PROFILE_ENV


@pytest.fixture(autouse=True)
def _fresh_runtime(monkeypatch):
    """Every test starts from built-in defaults and the packaged profile."""
    monkeypatch.delenv(PROFILE_ENV, raising=False)
    runtime.reset()
    yield
    runtime.reset()
