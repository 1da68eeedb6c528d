"""Environment entries and the predefined environments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from tigerc.semtypes import Ty, int_ty, string_ty, void_ty
from tigerc.symbol import ScopedTable, symbol


@dataclass
class VarEntry:
    """A variable binding in the value environment."""

    ty: Optional[Ty]


@dataclass
class FunEntry:
    """A function binding: parameter types and result type."""

    formals: list[Ty] = field(default_factory=list)
    result: Optional[Ty] = None


def base_tenv() -> ScopedTable:
    """Return a type environment holding the predefined types."""
    tenv = ScopedTable()
    tenv.enter(symbol("int"), int_ty())
    tenv.enter(symbol("string"), string_ty())
    return tenv


def base_venv() -> ScopedTable:
    """Return a value environment holding the standard library functions."""
    builtins = {
        "print": ([string_ty()], void_ty()),
        "flush": ([], void_ty()),
        "getchar": ([], string_ty()),
        "ord": ([string_ty()], int_ty()),
        "chr": ([int_ty()], string_ty()),
        "size": ([string_ty()], int_ty()),
        "substring": ([string_ty(), int_ty(), int_ty()], string_ty()),
        "concat": ([string_ty(), string_ty()], string_ty()),
        "not": ([int_ty()], int_ty()),
        "exit": ([int_ty()], void_ty()),
    }
    venv = ScopedTable()
    for name, (formals, result) in builtins.items():
        venv.enter(symbol(name), FunEntry(formals, result))
    return venv