"""Interned symbols and symbol tables with nested scopes."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


class Symbol:
    """A unique name: every request for the same string yields this object."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Symbol({self.name!r})"

    def __str__(self) -> str:
        return self.name


_interned: dict[str, Symbol] = {}


def symbol(name: str) -> Symbol:
    """Return the unique symbol for ``name``."""
    sym = _interned.get(name)
    if sym is None:
        sym = _interned[name] = Symbol(name)
    return sym


# Never interned, so no program name can collide with it.
_MARK = Symbol("<mark>")


class ScopedTable:
    """Map symbols to values; newer bindings shadow older ones until popped."""

    def __init__(self) -> None:
        self._bindings: dict[Symbol, list[Any]] = {}
        self._log: list[tuple[Symbol, Any]] = []

    def enter(self, sym: Symbol, value: Any) -> None:
        """Bind ``sym`` to ``value``, shadowing any earlier binding."""
        if sym is None:
            raise ValueError("cannot bind a missing symbol")
        self._bindings.setdefault(sym, []).append(value)
        self._log.append((sym, value))

    def look(self, sym: Symbol) -> Any:
        """Return the most recent binding of ``sym``, or None if unbound."""
        stack = self._bindings.get(sym)
        return stack[-1] if stack else None

    def pop(self) -> Symbol:
        """Remove the most recent binding and return its symbol."""
        if not self._log:
            raise IndexError("pop from an empty table")
        sym, _ = self._log.pop()
        stack = self._bindings[sym]
        stack.pop()
        if not stack:
            del self._bindings[sym]
        return sym

    def begin_scope(self) -> None:
        """Start a new nested scope."""
        self.enter(_MARK, None)

    def end_scope(self) -> None:
        """Drop every binding made since the current scope began."""
        while self.pop() is not _MARK:
            pass

    def dump(self) -> Iterator[tuple[Symbol, Any]]:
        """Yield every binding, shadowed ones too, newest first."""
        for sym, value in reversed(list(self._log)):
            if sym is not _MARK:
                yield sym, value