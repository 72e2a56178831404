# pymocks/selector.py
from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Tuple

from .errors import PropertyResolutionError

_log = logging.getLogger("pymocks.selector")

# (kind, label, probe-returned-for-it)
_Step = Tuple[str, str, Any]


class _Probe:
    """
    Stand-in argument for a selector. Records every attribute access, call and
    subscript made on it (or on what it hands back) into a shared trail.
    """

    __slots__ = ("_probe_trail", "_probe_path")

    def __init__(self, trail: List[_Step], path: str = "") -> None:
        object.__setattr__(self, "_probe_trail", trail)
        object.__setattr__(self, "_probe_path", path)

    def __getattr__(self, name: str) -> "_Probe":
        child = _Probe(self._probe_trail, f"{self._probe_path}.{name}")
        self._probe_trail.append(("attr", name, child))
        return child

    def __call__(self, *args: Any, **kwargs: Any) -> "_Probe":
        child = _Probe(self._probe_trail, f"{self._probe_path}()")
        self._probe_trail.append(("call", f"{self._probe_path}()", child))
        return child

    def __getitem__(self, key: Any) -> "_Probe":
        child = _Probe(self._probe_trail, f"{self._probe_path}[{key!r}]")
        self._probe_trail.append(("item", f"{self._probe_path}[{key!r}]", child))
        return child

    def __setattr__(self, name: str, value: Any) -> None:
        self._probe_trail.append(("setattr", name, None))

    def __repr__(self) -> str:
        return f"<selector probe x{self._probe_path}>"


def _labels(trail: List[_Step]) -> list[str]:
    return [f"{kind}:{label}" for kind, label, _ in trail]


def resolve_property(selector: Optional[Callable[[Any], Any]], property_name: Optional[str] = None) -> str:
    """
    Return the attribute name a selector such as ``lambda f: f.name`` points at.

    An explicit ``property_name`` wins and the selector is not evaluated.
    Otherwise the selector is called once with a recording probe; it must
    perform exactly one attribute access on its argument and return the result
    of that access untouched. Anything else raises PropertyResolutionError.
    """
    if property_name:
        return property_name

    if not callable(selector):
        raise PropertyResolutionError(
            f"selector must be a one-argument callable, got {selector!r}", selector=selector
        )

    trail: List[_Step] = []
    root = _Probe(trail)
    try:
        returned = selector(root)
    except Exception as exc:
        raise PropertyResolutionError(selector=selector, trail=_labels(trail)) from exc

    if len(trail) != 1:
        raise PropertyResolutionError(selector=selector, trail=_labels(trail))

    kind, name, child = trail[0]
    if kind != "attr" or returned is not child:
        raise PropertyResolutionError(selector=selector, trail=_labels(trail))

    _log.debug("selector %r resolved to '%s'", selector, name)
    return name
