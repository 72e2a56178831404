from __future__ import annotations

from typing import (
    Any,
    Callable,
    Literal,
    Mapping,
    Optional,
    Protocol,
    Union,
    get_args,
    runtime_checkable,
)

__all__ = [
    "BackendName",
    "BACKEND_NAMES",
    "Spy",
    "SpyAccessor",
    "Overrides",
    "SpyBackend",
]


# ----------------------------- Backend tags ----------------------------------

# Closed set: the selector and get_backend() only know these two.
BackendName = Literal["unittest", "pytest-mock"]
BACKEND_NAMES: tuple[str, ...] = get_args(BackendName)


# ----------------------------- Spy handles -----------------------------------

# Whatever unittest.mock hands back: a MagicMock, or an autospecced function
# that proxies one through its ``.mock`` attribute (pytest-mock spies).
# Both expose call_count / assert_called* / reset_mock / side_effect.
Spy = Any

# Zero-argument accessor returning the *current* spy of one attribute.
SpyAccessor = Callable[[], Optional[Spy]]

# Partial shape of the mocked type: a mapping of attribute -> value, or an
# existing instance whose own attributes are taken as overrides.
Overrides = Union[Mapping[str, Any], object, None]


# ----------------------------- Capability ------------------------------------

@runtime_checkable
class SpyBackend(Protocol):
    """
    What the mock layer needs from a spy framework.

    - call_fake_override: route ``obj.key`` through ``stub``; reuse and reset
      an existing spy instead of stacking a new one on top of it.
    - call_through_if_function: wrap a plain function so calls are recorded
      and still reach the original body; leave data and existing spies alone.
    - stopall: undo every patch this backend installed, newest first.
    """

    name: str

    def call_fake_override(self, obj: Any, key: str, stub: Callable[..., Any]) -> Spy:
        ...

    def call_through_if_function(self, obj: Any, key: str) -> Optional[Spy]:
        ...

    def stopall(self) -> None:
        ...
