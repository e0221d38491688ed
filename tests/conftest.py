# conftest.py
from __future__ import annotations

import os
import uuid

import pytest

from jrdkit.core.log import (
    bind_context,
    configure_from_env,
    enable_stdout_logging,
    get_logger,
    log_context,
)

_JRDKIT_ENV = ("JRDKIT_INDENT", "JRDKIT_ENSURE_ASCII", "JRDKIT_WEBFINGER")


def pytest_addoption(parser):
    parser.addoption(
        "--log-json",
        action="store_true",
        default=False,
        help="Emit jrdkit logs in JSON format during tests",
    )


@pytest.fixture(scope="session", autouse=True)
def _configure_jrdkit_logging(request):
    configure_from_env()
    prefer_json = request.config.getoption("--log-json")
    # Unless enabled explicitly through env, turn it on here (human-readable by default)
    if os.getenv("JRDKIT_LOG_STDOUT", "").lower() not in ("1", "true", "yes", "on"):
        enable_stdout_logging(level="DEBUG", json_output=prefer_json, pretty=not prefer_json)
    bind_context(role="pytest")


@pytest.fixture(scope="session")
def session_run_id():
    return uuid.uuid4().hex[:8]


@pytest.fixture(autouse=True)
def _test_log_context(request, session_run_id):
    log = get_logger("test")
    with log_context(pytest_nodeid=request.node.nodeid, test=request.node.name, test_run=session_run_id):
        log.debug("pytest.test.start", event="pytest.test.start")
        yield


@pytest.fixture(autouse=True)
def _clean_codec_env(monkeypatch):
    """Codec config env vars from the outer shell must not leak into tests."""
    for name in _JRDKIT_ENV:
        monkeypatch.delenv(name, raising=False)
