"""Test configuration and shared fixtures for shardcas tests."""

import logging

import pytest

from shardcas.core import paths
from shardcas.core.config import LOG_LEVEL_ENV_VAR, ROOT_ENV_VAR, ShardCASConfig
from shardcas.services.storage import ShardedFileStore


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config and default store root at a temp home for every test.

    Also undoes any handler the CLI installs on the package logger so log
    capture in later tests is unaffected.
    """
    home = tmp_path / "home"
    monkeypatch.setattr(paths, "SHARDCAS_HOME", home)
    monkeypatch.setattr(paths, "CONFIG_FILE", home / "config.yaml")
    monkeypatch.setattr(paths, "DEFAULT_STORE_ROOT", home / "objects")
    monkeypatch.delenv(ROOT_ENV_VAR, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
    ShardCASConfig.reset()

    yield home

    ShardCASConfig.reset()
    package_logger = logging.getLogger("shardcas")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def store_root(tmp_path):
    """Store root that does not exist yet."""
    return tmp_path / "objects"


@pytest.fixture
def store(store_root):
    """Filesystem store over a fresh root."""
    return ShardedFileStore(store_root)
