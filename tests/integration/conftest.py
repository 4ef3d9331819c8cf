import pytest


def pytest_collection_modifyitems(items):
    """Apply integration marker to all tests in this directory."""
    for item in items:
        if "/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def isolated_environment(config_path, monkeypatch):
    """Keep CLI runs away from the user's config file and log directory."""
    monkeypatch.setattr("rovocs.logging_config._logging_configured", True)
    return config_path
