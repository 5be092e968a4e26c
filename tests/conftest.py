import pytest

from searchdsl.config.runtime import get_settings
from searchdsl.observability import reset_metrics


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Each test sees settings built from its own environment."""
    for name in ("SEARCHDSL_STRICT_SHAPES", "SEARCHDSL_FILTER_ONLY_QUERY",
                 "SEARCHDSL_DEFAULT_INDEX", "SEARCHDSL_MAX_SIZE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    reset_metrics()
    yield
    get_settings.cache_clear()
