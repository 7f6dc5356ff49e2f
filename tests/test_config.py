#!/usr/bin/env python3
"""
Tests for walker configuration and environment overrides
"""

import os

import pytest

from fsignore.config import WalkerConfig
from fsignore.constants import IGNORE_FILENAME, READ_CHUNK_SIZE


def test_defaults(tmp_path):
    config = WalkerConfig(path=str(tmp_path))

    assert config.path == os.path.abspath(str(tmp_path))
    assert config.ignore_files == [IGNORE_FILENAME]
    assert config.sort is None
    assert config.filter is None
    assert config.prune_excluded
    assert config.chunk_size == READ_CHUNK_SIZE


def test_relative_path_is_made_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = WalkerConfig(path="sub")
    assert config.path == os.path.join(os.getcwd(), "sub")


def test_validation():
    with pytest.raises(ValueError):
        WalkerConfig(path="/", ignore_files=[])
    with pytest.raises(ValueError):
        WalkerConfig(path="/", ignore_files=[""])
    with pytest.raises(ValueError):
        WalkerConfig(path="/", sort="size")

    assert WalkerConfig(path="/", chunk_size=0).chunk_size == 1


def test_from_env(monkeypatch):
    monkeypatch.setenv("FSIGNORE_IGNORE_FILES", ".ignore, .gitignore,,")
    monkeypatch.setenv("FSIGNORE_SORT", "ALPHA")

    config = WalkerConfig.from_env("/")
    assert config.ignore_files == [".ignore", ".gitignore"]
    assert config.sort == "alpha"


def test_from_env_overrides_win(monkeypatch):
    monkeypatch.setenv("FSIGNORE_IGNORE_FILES", ".gitignore")

    config = WalkerConfig.from_env("/", ignore_files=[".custom"], prune_excluded=False)
    assert config.ignore_files == [".custom"]
    assert not config.prune_excluded


def test_from_env_without_variables(monkeypatch):
    monkeypatch.delenv("FSIGNORE_IGNORE_FILES", raising=False)
    monkeypatch.delenv("FSIGNORE_SORT", raising=False)

    config = WalkerConfig.from_env("/")
    assert config.ignore_files == [IGNORE_FILENAME]
    assert config.sort is None
