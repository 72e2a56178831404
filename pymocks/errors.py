from __future__ import annotations


class PymocksError(Exception):
    """Base exception for pymocks."""


class ConfigError(PymocksError):
    pass


class PropertyResolutionError(PymocksError):
    """
    Raised when a selector such as ``lambda f: f.name`` cannot be reduced to a
    single attribute name.

    Only one plain attribute access on the selector argument is understood.
    Chained access (``f.a.b``), calls (``f.a()``), subscripts and selectors that
    return anything else end up here. Pass ``property_name=`` to bypass the
    selector entirely.
    """

    def __init__(self, message: str | None = None, *, selector: object = None, trail: "list[str] | None" = None) -> None:
        self.selector = selector
        self.trail: list[str] = list(trail or [])
        if message is None:
            seen = " -> ".join(self.trail) or "no attribute access"
            message = f"property not resolvable from selector {selector!r} (recorded: {seen})"
        super().__init__(message)
