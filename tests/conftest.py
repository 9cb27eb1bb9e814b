"""
Pytest configuration and shared fixtures for iupacgraph tests.

Provides:
- Fixture molecule names with their reference InChI strings
- A temporary YAML config file and a fresh settings cache
"""

import pytest

from iupacgraph import config
from tests.fixtures.test_data import INCHI


# ============================================================================
# MOLECULE FIXTURES
# ============================================================================

@pytest.fixture(params=sorted(INCHI), ids=str)
def named_molecule(request):
    """(IUPAC name, InChI) for every reference molecule."""
    return request.param, INCHI[request.param]


# ============================================================================
# CONFIGURATION FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Each test starts from the defaults with no config file in play."""
    monkeypatch.delenv(config.CONFIG_ENV_VAR, raising=False)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML config and return its path."""
    def write(text: str):
        path = tmp_path / "iupacgraph.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return write
