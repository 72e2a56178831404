# pymocks/plugin.py
"""pytest plugin, registered through the ``pytest11`` entry point."""
from __future__ import annotations

import logging
from typing import Any, Callable

import pytest

from . import detect
from .backends import PytestMockBackend
from .config import get_effective_config
from .errors import PymocksError
from .mock import Mock

_log = logging.getLogger("pymocks.plugin")


def pytest_configure(config: pytest.Config) -> None:
    detect.register_pytest_config(config)
    try:
        level = get_effective_config("mock").get("log_level")
    except PymocksError as exc:
        # bad config surfaces when a mock first resolves its backend
        _log.warning("pymocks config ignored: %s", exc)
        return
    if level is not None:
        logging.getLogger("pymocks").setLevel(level)


@pytest.hookimpl(trylast=True)
def pytest_runtest_teardown(item: pytest.Item, nextitem: Any) -> None:
    # Mock.static() patches classes; never let them outlive the test
    detect.stopall()


@pytest.fixture
def pymock(mocker) -> Callable[..., Mock]:
    """
    Factory for Mock objects spied through this test's ``mocker``::

        def test_greets(pymock):
            svc = pymock({"name": lambda: "Ann"})
    """
    backend = PytestMockBackend(mocker)

    def _make(overrides: Any = None, **kwargs: Any) -> Mock:
        kwargs.setdefault("backend", backend)
        return Mock(overrides, **kwargs)

    return _make
