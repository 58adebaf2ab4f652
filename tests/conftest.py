import pytest


@pytest.fixture(autouse=True)
def _clean_log_level(monkeypatch):
    """Keep a developer's AS3TS_LOG_LEVEL from leaking into CLI tests."""
    monkeypatch.delenv("AS3TS_LOG_LEVEL", raising=False)
    yield
