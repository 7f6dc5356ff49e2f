#!/usr/bin/env python3
"""
Tests for logging configuration and cascade tracing
"""

import json
import logging

import pytest

from conftest import ignore_entry
from fsignore.ignore import IgnoreNode
from fsignore.utils import TRACE_LEVEL, configure_logging, get_logger
from fsignore.walker.lister import Entry


@pytest.fixture
def package_logger():
    logger = logging.getLogger('fsignore')
    handlers, level = logger.handlers[:], logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


def test_trace_level_is_registered():
    assert logging.getLevelName(TRACE_LEVEL) == "TRACE"
    assert hasattr(get_logger("fsignore.test"), "trace")


def test_explicit_level(package_logger):
    configure_logging(log_level="trace")
    assert package_logger.level == TRACE_LEVEL
    assert len(package_logger.handlers) == 1


def test_level_from_environment(package_logger, monkeypatch):
    monkeypatch.setenv("FSIGNORE_LOG_LEVEL", "DEBUG")
    configure_logging()
    assert package_logger.level == logging.DEBUG


def test_unknown_level_falls_back_to_info(package_logger):
    configure_logging(log_level="chatty")
    assert package_logger.level == logging.INFO


def test_json_output(package_logger, capsys):
    configure_logging(log_level="INFO", json_output=True)
    get_logger("fsignore.test").info("hello")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["message"] == "hello"
    assert payload["component"] == "fsignore.test"
    assert payload["level"] == "INFO"


def test_cascade_hits_are_traced(caplog):
    caplog.set_level(TRACE_LEVEL, logger="fsignore")

    node = IgnoreNode("/root", lister=None)
    node.add_ignore_rules(["*.log"], ignore_entry("/root"))
    node.apply_ignores(Entry(path="/root/a.log", basename="a.log", is_directory=False))

    traces = [r for r in caplog.records if r.levelno == TRACE_LEVEL]
    assert len(traces) == 1
    assert "*.log" in traces[0].getMessage()
