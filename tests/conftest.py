"""Shared fixtures for confhound tests."""

import pytest

from confhound import ConfigManager, reset_manager
from confhound.sources import EnvironmentSource, ProcessProperties, ProcessPropertySource


@pytest.fixture(autouse=True)
def _reset_global_manager():
    """Each test starts without a process-wide manager."""
    reset_manager()
    yield
    reset_manager()


@pytest.fixture
def fake_env():
    """Mutable stand-in for os.environ."""
    return {}


@pytest.fixture
def properties():
    """Private process-property store."""
    return ProcessProperties()


@pytest.fixture
def manager(fake_env, properties):
    """Manager whose default sources read fakes instead of process state."""
    return ConfigManager([
        EnvironmentSource(fake_env),
        ProcessPropertySource(properties),
    ])


@pytest.fixture
def write_file(tmp_path):
    """Write a file under tmp_path and return its path."""

    def _write(name: str, content: str):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
