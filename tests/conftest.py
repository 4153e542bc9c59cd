# tests/conftest.py
import pytest

from failscope.config import FailScopeConfig, reset_config, set_config
from failscope.core.trace import MemoryTraceRecorder, recording


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Every test starts from code defaults, never from ~/.failscope."""
    monkeypatch.delenv("FAILSCOPE_CONFIG", raising=False)
    set_config(FailScopeConfig.default())
    yield
    reset_config()


@pytest.fixture
def recorder():
    with recording(MemoryTraceRecorder()) as rec:
        yield rec
