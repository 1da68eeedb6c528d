"""Semantic types of Tiger values."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Optional

from tigerc.symbol import Symbol


class TyKind(Enum):
    """The kinds of semantic type."""

    RECORD = auto()
    NIL = auto()
    INT = auto()
    STRING = auto()
    ARRAY = auto()
    NAME = auto()
    VOID = auto()


@dataclass(eq=False)
class TyField:
    """A named, typed field of a record type."""

    name: Symbol
    ty: Ty


@dataclass(eq=False)
class Ty:
    """A semantic type.

    Types compare by identity: every constructor call makes a distinct type.
    ``fields`` is used by records, ``element`` by arrays, and ``sym`` with
    ``ty`` by named types, whose ``ty`` may be filled in later.
    """

    kind: TyKind
    fields: list[TyField] = field(default_factory=list)
    element: Optional[Ty] = None
    sym: Optional[Symbol] = None
    ty: Optional[Ty] = None

    def __repr__(self) -> str:
        if self.kind is TyKind.NAME:
            return f"Ty(NAME {self.sym})"
        if self.kind is TyKind.RECORD:
            names = ", ".join(str(f.name) for f in self.fields)
            return f"Ty(RECORD {{{names}}})"
        if self.kind is TyKind.ARRAY:
            return f"Ty(ARRAY of {self.element!r})"
        return f"Ty({self.kind.name})"


def nil_ty() -> Ty:
    """Return a new nil type."""
    return Ty(TyKind.NIL)


def int_ty() -> Ty:
    """Return a new int type."""
    return Ty(TyKind.INT)


def string_ty() -> Ty:
    """Return a new string type."""
    return Ty(TyKind.STRING)


def void_ty() -> Ty:
    """Return a new void type."""
    return Ty(TyKind.VOID)


def record_ty(fields: Optional[Iterable[TyField]]) -> Ty:
    """Return a new record type with ``fields`` in order."""
    return Ty(TyKind.RECORD, fields=list(fields or ()))


def array_ty(element: Optional[Ty]) -> Ty:
    """Return a new array type of ``element``."""
    return Ty(TyKind.ARRAY, element=element)


def name_ty(sym: Symbol, ty: Optional[Ty]) -> Ty:
    """Return a new named type for ``sym``, bound to ``ty`` (possibly later)."""
    return Ty(TyKind.NAME, sym=sym, ty=ty)