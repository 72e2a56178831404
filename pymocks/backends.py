# pymocks/backends.py
from __future__ import annotations

import functools
import inspect
import logging
from types import SimpleNamespace
from typing import Any, Callable, List, Optional
from unittest import mock

from pytest_mock import MockerFixture

from .typing_defs import Spy

log = logging.getLogger("pymocks.backends")


class StandIn(SimpleNamespace):
    """Attribute bag used as the stand-in when no instance is supplied."""


def is_spy(value: Any) -> bool:
    """True for unittest.mock objects and autospecced functions wrapping one."""
    if isinstance(value, mock.NonCallableMock):
        return True
    return inspect.isfunction(value) and isinstance(getattr(value, "mock", None), mock.NonCallableMock)


def is_function(value: Any) -> bool:
    """
    Function-valued attributes are the ones that get wrapped. Classes and
    arbitrary callable instances count as data.
    """
    if is_spy(value):
        return False
    return inspect.isroutine(value) or isinstance(value, functools.partial)


class _BaseBackend:
    """
    Shared reuse/swallow logic. Subclasses only know how to put a *fresh* spy
    in place (_patch_fake / _patch_spy) and how to undo their patches.
    """

    name = ""

    def call_fake_override(self, obj: Any, key: str, stub: Callable[..., Any]) -> Spy:
        current = getattr(obj, key, None)
        if is_spy(current):
            # même spy : on efface l'historique avant de rebrancher le fake
            current.reset_mock()
            current.side_effect = stub
            log.debug("[%s] reused spy for '%s' with new fake %r", self.name, key, stub)
            return current
        spy = self._patch_fake(obj, key, stub)
        log.debug("[%s] installed fake spy for '%s'", self.name, key)
        return spy

    def call_through_if_function(self, obj: Any, key: str) -> Optional[Spy]:
        value = getattr(obj, key, None)
        if is_spy(value):
            log.debug("[%s] '%s' already spied; keeping existing spy", self.name, key)
            return value
        if not is_function(value):
            return None
        spy = self._patch_spy(obj, key)
        log.debug("[%s] call-through spy on '%s'", self.name, key)
        return spy

    def _patch_fake(self, obj: Any, key: str, stub: Callable[..., Any]) -> Spy:
        raise NotImplementedError

    def _patch_spy(self, obj: Any, key: str) -> Spy:
        raise NotImplementedError

    def stopall(self) -> None:
        raise NotImplementedError

    def __enter__(self) -> "_BaseBackend":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.stopall()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"


class UnittestMockBackend(_BaseBackend):
    """
    Plain ``unittest.mock`` patchers, remembered so they can be undone.

    Attributes of a ``StandIn`` are owned by the mock that built it and are
    assigned directly; nothing is remembered for them. Everything else
    (user instances, classes) stays patched until ``stopall()``, which runs
    on leaving a ``with UnittestMockBackend() as backend:`` block or from a
    ``TestCase.addCleanup(backend.stopall)``.
    """

    name = "unittest"

    def __init__(self) -> None:
        self._patchers: List[Any] = []

    def _install(self, obj: Any, key: str, spy: Spy) -> Spy:
        if isinstance(obj, StandIn):
            setattr(obj, key, spy)
            return spy
        patcher = mock.patch.object(obj, key, new=spy)
        patcher.start()
        self._patchers.append(patcher)
        return spy

    def _patch_fake(self, obj: Any, key: str, stub: Callable[..., Any]) -> Spy:
        return self._install(obj, key, mock.MagicMock(name=key, side_effect=stub))

    def _patch_spy(self, obj: Any, key: str) -> Spy:
        original = getattr(obj, key)
        return self._install(obj, key, mock.MagicMock(name=key, wraps=original))

    def stopall(self) -> None:
        n = len(self._patchers)
        while self._patchers:
            self._patchers.pop().stop()
        if n:
            log.debug("[%s] stopped %d patch(es)", self.name, n)


class PytestMockBackend(_BaseBackend):
    """
    Spies through a ``pytest_mock.MockerFixture``. Either the per-test
    ``mocker`` fixture, or a process-wide one built from the pytest config.
    """

    name = "pytest-mock"

    def __init__(self, mocker: MockerFixture) -> None:
        self.mocker = mocker

    @classmethod
    def from_config(cls, config: Any) -> "PytestMockBackend":
        return cls(MockerFixture(config))

    def _patch_fake(self, obj: Any, key: str, stub: Callable[..., Any]) -> Spy:
        return self.mocker.patch.object(obj, key, side_effect=stub)

    def _patch_spy(self, obj: Any, key: str) -> Spy:
        # functions come back autospecced: a real function proxying a MagicMock
        return self.mocker.spy(obj, key)

    def stopall(self) -> None:
        self.mocker.stopall()
