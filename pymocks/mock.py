# pymocks/mock.py
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Generic, Iterable, Optional, Tuple, Type, TypeVar

from .backends import StandIn, is_function, is_spy
from .detect import resolve_backend
from .selector import resolve_property
from .typing_defs import Overrides, Spy, SpyAccessor, SpyBackend

_log = logging.getLogger("pymocks.mock")

T = TypeVar("T")
R = TypeVar("R")
R2 = TypeVar("R2")

Selector = Optional[Callable[[T], Any]]


def ANY_FUNC(*args: Any, **kwargs: Any) -> None:
    """
    Intentionally empty function, for methods that only need to exist::

        mock.extend({"save": ANY_FUNC})
    """
    return None


def _items(overrides: Overrides) -> Iterable[Tuple[str, Any]]:
    if overrides is None:
        return []
    if isinstance(overrides, Mapping):
        return list(overrides.items())
    # instance: its own attributes are the overrides
    return list(getattr(overrides, "__dict__", {}).items())


class Mock(Generic[T]):
    """
    Stand-in for an instance of ``T`` whose attributes can be overridden.

    Function-valued attributes are always wrapped by a spy (call-through for
    ``extend``, call-fake for ``setup().is_()``), one spy per attribute at a
    time. Data attributes are assigned as-is.

    Usage::

        mock = Mock[UserService]({"name": lambda: "Ann"})
        mock.setup(lambda s: s.save).is_(ANY_FUNC)
        code_under_test(mock.object)
        mock.spy_of(lambda s: s.save).assert_called_once()
    """

    ANY_FUNC = staticmethod(ANY_FUNC)

    def __init__(self, overrides: Overrides = None, *, backend: Optional[SpyBackend] = None) -> None:
        self._backend = backend
        # name -> accessor for the spy currently in charge of that attribute
        self._spies: Dict[str, SpyAccessor] = {}
        # name -> function the extend() spy of that attribute was built from
        self._sources: Dict[str, Any] = {}
        if overrides is None or isinstance(overrides, Mapping):
            self._object: Any = StandIn()
        else:
            self._object = overrides
        self.extend(overrides)

    # ---------------------------------------------------------------- factories

    @classmethod
    def of(cls, type_: Callable[[], T], *, backend: Optional[SpyBackend] = None) -> "Mock[T]":
        """Mock built around a fresh ``type_()`` instance."""
        return cls(type_(), backend=backend)

    @staticmethod
    def static(owner: Any, key: str, stub: Callable[..., Any], *, backend: Optional[SpyBackend] = None) -> Spy:
        """
        Fake a class-level member (static/class method or class attribute).
        Call history is reset on every call, so sequential tests start at zero.
        """
        return (backend or resolve_backend()).call_fake_override(owner, key, stub)

    # ---------------------------------------------------------------- accessors

    @property
    def backend(self) -> SpyBackend:
        if self._backend is None:
            self._backend = resolve_backend()
        return self._backend

    @property
    def object(self) -> T:
        """The stand-in handed to the code under test."""
        return self._object

    Object = object

    # ---------------------------------------------------------------- overrides

    def extend(self, overrides: Overrides) -> "Mock[T]":
        """
        Assign every top-level entry of ``overrides`` onto the stand-in.
        Functions get a call-through spy; nested values are assigned whole.
        """
        for key, value in _items(overrides):
            source = self._extend_source(key)
            if source is not None and source is value:
                _log.debug("extend '%s': same function, spy kept", key)
                continue
            setattr(self._object, key, value)
            if is_function(value) or is_spy(value):
                self.backend.call_through_if_function(self._object, key)
                self._register(key, self._accessor_for(key), source=value)
            else:
                self._spies.pop(key, None)
                self._sources.pop(key, None)
        return self

    def setup(self, selector: Selector[T], property_name: Optional[str] = None) -> "Setup[T, Any]":
        """Builder for one attribute; finish it with ``.is_(value)``."""
        name = resolve_property(selector, property_name)
        setup: Setup[T, Any] = Setup(self, name)
        self._register(name, setup._current_spy)
        return setup

    def spy_of(self, selector: Selector[T], property_name: Optional[str] = None) -> Optional[Spy]:
        """Current spy of an attribute, or None if it never held a function."""
        name = resolve_property(selector, property_name)
        accessor = self._spies.get(name)
        return accessor() if accessor is not None else None

    # ---------------------------------------------------------------- internals

    def _register(self, key: str, accessor: SpyAccessor, source: Any = None) -> None:
        self._spies[key] = accessor
        if source is None:
            self._sources.pop(key, None)
        else:
            self._sources[key] = source

    def _extend_source(self, key: str) -> Any:
        """Function behind the attribute's live extend() spy, else None."""
        if key not in self._sources or not is_spy(getattr(self._object, key, None)):
            return None
        return self._sources[key]

    def _accessor_for(self, key: str) -> SpyAccessor:
        def _current() -> Optional[Spy]:
            value = getattr(self._object, key, None)
            return value if is_spy(value) else None

        return _current

    def __repr__(self) -> str:
        names = sorted(getattr(self._object, "__dict__", {}))
        return f"<Mock of {type(self._object).__name__} attrs={names} spied={sorted(self._spies)}>"


class Setup(Generic[T, R]):
    """
    One-attribute builder bound to a Mock.

    Creating it replaces the attribute with an empty placeholder behind a bare
    spy (calls return None) until ``is_`` supplies the real value.
    """

    def __init__(self, mock: Mock[T], key: str, *, placeholder: bool = True) -> None:
        self._mock = mock
        self._key = key
        self._spy: Optional[Spy] = None
        if placeholder:
            target = mock.object
            setattr(target, key, StandIn())
            self._spy = mock.backend.call_fake_override(target, key, ANY_FUNC)

    @property
    def key(self) -> str:
        return self._key

    @property
    def spy(self) -> Optional[Spy]:
        return self._spy

    Spy = spy

    def _current_spy(self) -> Optional[Spy]:
        return self._spy

    def is_(self, value: R) -> Mock[T]:
        """
        Set the attribute. Functions are installed as the fake of the
        attribute's spy; anything else is assigned without a spy.
        Returns the owning Mock so setups can be chained.
        """
        target = self._mock.object
        if is_function(value):
            self._spy = self._mock.backend.call_fake_override(target, self._key, value)
        else:
            setattr(target, self._key, value)
            # a spy handed in as the value is its own observer
            self._spy = value if is_spy(value) else None
        self._mock._register(self._key, self._current_spy)
        _log.debug("setup '%s' -> %r (spied=%s)", self._key, value, self._spy is not None)
        return self._mock

    returns = is_

    def as_(self, return_type: Optional[Type[R2]] = None) -> "Setup[T, R2]":
        """
        Same attribute, re-typed return value. ``return_type`` is only a hint
        for type checkers: ``setup(lambda f: f.load).as_(User).is_(...)``.
        """
        retyped: Setup[T, R2] = Setup(self._mock, self._key, placeholder=False)
        retyped._spy = self._spy
        self._mock._register(self._key, retyped._current_spy)
        return retyped
