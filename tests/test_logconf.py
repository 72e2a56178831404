# tests/test_logconf.py
import io
import logging

import pytest

from pymocks import ConfigError
from pymocks.logconf import configure_logger


@pytest.fixture
def pkg_logger():
    pkg = logging.getLogger("pymocks")
    handlers, level = list(pkg.handlers), pkg.level
    yield pkg
    pkg.handlers[:] = handlers
    pkg.setLevel(level)


def test_level_name_and_child_logger(pkg_logger):
    buf = io.StringIO()
    log = configure_logger("debug", name="pymocks.cli", stream=buf)

    log.debug("hello")

    assert pkg_logger.level == logging.DEBUG
    assert buf.getvalue() == "[pymocks] DEBUG pymocks.cli: hello\n"


def test_second_call_reuses_handler(pkg_logger):
    buf = io.StringIO()
    configure_logger(logging.INFO, stream=buf)
    configure_logger("error", stream=io.StringIO())

    console = [h for h in pkg_logger.handlers if type(h) is logging.StreamHandler]
    assert len(console) == 1
    assert pkg_logger.level == logging.ERROR
    logging.getLogger("pymocks.mock").error("kept")
    assert "kept" in buf.getvalue()


def test_unknown_level_name(pkg_logger):
    with pytest.raises(ConfigError):
        configure_logger("loud")
