"""Global pytest configuration and fixtures."""

import pytest

from protomatter.settings import reset_config


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test on default settings.

    Points project-file discovery at an empty directory and drops any
    PROTOMATTER_* variables from the environment.
    """
    import os

    for key in list(os.environ):
        if key.startswith("PROTOMATTER_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("PROTOMATTER_PROJECT_DIR", str(tmp_path))
    reset_config()
    yield
    reset_config()
