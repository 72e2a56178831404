# pymocks/detect.py
from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

from .backends import PytestMockBackend, UnittestMockBackend
from .config import get_effective_config
from .errors import ConfigError
from .typing_defs import BACKEND_NAMES, SpyBackend

_log = logging.getLogger("pymocks.detect")

# Process-wide cache. Set on first resolve_backend(), never re-detected.
_RESOLVED: Optional[SpyBackend] = None

# Filled by the pytest plugin's pytest_configure(); None outside pytest.
_PYTEST_CONFIG: Any = None


def register_pytest_config(config: Any) -> None:
    global _PYTEST_CONFIG
    _PYTEST_CONFIG = config


def pytest_runner_active() -> bool:
    """Environment probe: did a pytest session load the pymocks plugin?"""
    return _PYTEST_CONFIG is not None


def get_backend(name: str) -> SpyBackend:
    if name == "unittest":
        return UnittestMockBackend()
    if name == "pytest-mock":
        if _PYTEST_CONFIG is None:
            raise ConfigError(
                "backend 'pytest-mock' needs a running pytest session with the pymocks plugin loaded"
            )
        return PytestMockBackend.from_config(_PYTEST_CONFIG)
    raise ConfigError(
        "Unknown backend '{}'. Available: {}".format(name, list(BACKEND_NAMES))
    )


def choose_backend_name() -> Tuple[str, str]:
    """Return (backend name, reason) without building anything."""
    cfg = get_effective_config("mock")
    name = cfg.get("backend") or "auto"
    if name != "auto":
        return name, "configured"
    if pytest_runner_active():
        return "pytest-mock", "auto: pytest session detected"
    return "unittest", "auto: no pytest session"


def resolve_backend() -> SpyBackend:
    """
    The process-wide backend. Built on first call from the configured name
    (or the environment probe when it is "auto"), then cached for good.
    """
    global _RESOLVED
    if _RESOLVED is None:
        name, reason = choose_backend_name()
        _RESOLVED = get_backend(name)
        _log.debug("resolved backend %r (%s)", _RESOLVED, reason)
    return _RESOLVED


def stopall() -> None:
    """Undo every patch made through the process-wide backend, if any."""
    if _RESOLVED is not None:
        _RESOLVED.stopall()
