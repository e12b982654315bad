from __future__ import annotations

import logging
from pathlib import Path

import pytest

from gitgen.constant import SETTINGS_KEY_ENV
from gitgen.settings import EncryptedStore, SettingsRepository


@pytest.fixture(autouse=True)
def _no_env_key(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(SETTINGS_KEY_ENV, raising=False)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    # CLI runs attach a handler bound to the runner's captured stderr.
    logger = logging.getLogger("gitgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "gitgen" / "settings.enc"


@pytest.fixture
def key_path(settings_path: Path) -> Path:
    return settings_path.parent / "keys" / "settings.key"


@pytest.fixture
def store(settings_path: Path, key_path: Path) -> EncryptedStore:
    return EncryptedStore(settings_path, key_path)


@pytest.fixture
def repo(store: EncryptedStore) -> SettingsRepository:
    return SettingsRepository(store)
