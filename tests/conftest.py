import pytest

from persistkit.logging import clear_request_context
from persistkit.settings import main as settings_main


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run every test against default settings, ignoring the caller's environment."""
    for name in ("DATABASE_URL", "DATABASE_DIALECT", "NAMING_STRATEGY", "LOG_LEVEL", "APP_ENV"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    settings_main._settings = None
    yield
    clear_request_context()
    settings_main._settings = None
