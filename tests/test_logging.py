"""Tests for structured logging helpers."""

import json
import logging

import pytest
import structlog
from structlog.contextvars import get_contextvars

from gacs_pack.logging import BuildContext, add_build_context, as_structlog, configure_logging, get_logger


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


def test_build_context_binds_and_resets():
    with BuildContext("build-1") as build_id:
        assert build_id == "build-1"
        assert get_contextvars()["build_id"] == "build-1"

    assert "build_id" not in get_contextvars()


def test_build_context_generates_id():
    with BuildContext() as build_id:
        assert len(build_id) == 36


def test_configure_logging_renders_json(reset_structlog, capsys):
    configure_logging("INFO")
    logger = get_logger("gacs_pack.test")

    with BuildContext("build-2"):
        logger.info("context_built", sections=2)
    logger.debug("hidden")

    lines = [line for line in capsys.readouterr().out.splitlines() if line.strip()]
    assert len(lines) == 1
    entry = json.loads(lines[0])
    assert entry["event"] == "context_built"
    assert entry["sections"] == 2
    assert entry["level"] == "info"
    assert entry["build_id"] == "build-2"
    assert "timestamp" in entry


def test_bind_pack_id_scoped_to_build():
    build = BuildContext("build-3")

    with build:
        build.bind_pack_id("abc123")
        assert get_contextvars()["build_id"] == "build-3"
        assert get_contextvars()["context_pack_id"] == "abc123"

    assert "context_pack_id" not in get_contextvars()
    assert "build_id" not in get_contextvars()


def test_add_build_context_copies_ids():
    build = BuildContext("build-4")

    with build:
        build.bind_pack_id("abc123")
        event = add_build_context(None, "info", {"event": "context_built"})

    assert event == {"event": "context_built", "build_id": "build-4", "context_pack_id": "abc123"}


def test_add_build_context_keeps_explicit_values():
    with BuildContext("build-5"):
        event = add_build_context(None, "info", {"event": "x", "build_id": "explicit"})

    assert event["build_id"] == "explicit"


def test_as_structlog_wraps_stdlib_logger(caplog):
    caplog.set_level(logging.INFO, logger="gacs_pack.tests.wrap")
    wrapped = as_structlog(logging.getLogger("gacs_pack.tests.wrap"))

    wrapped.bind(role="provider").info("context_built", sections=2)

    entry = json.loads(caplog.records[-1].getMessage())
    assert entry == {"event": "context_built", "role": "provider", "sections": 2, "level": "info"}


def test_as_structlog_passes_structlog_loggers_through():
    logger = get_logger("gacs_pack.test")

    assert as_structlog(logger) is logger
