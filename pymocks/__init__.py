"""
pymocks: stand-in objects with spied methods for unit tests.

    from pymocks import Mock, ANY_FUNC

    mock = Mock({"name": lambda: "Ann"})
    assert mock.object.name() == "Ann"
    mock.spy_of(lambda f: f.name).assert_called_once()
"""
import logging

from .errors import (
    ConfigError,
    PropertyResolutionError,
    PymocksError,
)
from .backends import PytestMockBackend, UnittestMockBackend, is_spy
from .detect import resolve_backend, stopall
from .mock import ANY_FUNC, Mock, Setup, StandIn
from .selector import resolve_property

# Package-level logger stays quiet unless the host/CLI configures it.
_pkg_logger = logging.getLogger("pymocks")
if not any(isinstance(h, logging.NullHandler) for h in _pkg_logger.handlers):
    _pkg_logger.addHandler(logging.NullHandler())

__all__ = [
    "ANY_FUNC",
    "Mock",
    "Setup",
    "StandIn",
    "resolve_property",
    "resolve_backend",
    "stopall",
    "is_spy",
    "UnittestMockBackend",
    "PytestMockBackend",
    "PymocksError",
    "ConfigError",
    "PropertyResolutionError",
]
