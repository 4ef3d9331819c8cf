"""Pytest configuration and fixtures for ROVOCS tests."""

import pytest

from rovocs.analysis.types import AnalyzerConfig


def pytest_configure(config):
    """Register custom test markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that do not require external dependencies"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests combining multiple components"
    )


@pytest.fixture
def default_config():
    """Analyzer configuration with all defaults."""
    return AnalyzerConfig()


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    """Point the config module at a throwaway config file."""
    path = tmp_path / "config.toml"
    monkeypatch.setattr("rovocs.config.get_config_path", lambda: path)
    return path
