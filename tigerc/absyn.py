"""Abstract syntax tree of Tiger programs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union

from tigerc.symbol import Symbol


class Oper(Enum):
    """Binary operators."""

    PLUS = auto()
    MINUS = auto()
    TIMES = auto()
    DIVIDE = auto()
    EQ = auto()
    NEQ = auto()
    LT = auto()
    LE = auto()
    GT = auto()
    GE = auto()


# Variables


@dataclass
class SimpleVar:
    pos: int
    sym: Symbol


@dataclass
class FieldVar:
    pos: int
    var: Var
    sym: Symbol


@dataclass
class SubscriptVar:
    pos: int
    var: Var
    exp: Exp


# Expressions


@dataclass
class VarExp:
    pos: int
    var: Var


@dataclass
class NilExp:
    pos: int


@dataclass
class IntExp:
    pos: int
    value: int


@dataclass
class StringExp:
    pos: int
    value: str


@dataclass
class CallExp:
    pos: int
    func: Symbol
    args: list[Exp]


@dataclass
class OpExp:
    pos: int
    oper: Oper
    left: Exp
    right: Exp


@dataclass
class RecordExp:
    pos: int
    typ: Symbol
    fields: list[Efield]


@dataclass
class SeqExp:
    pos: int
    seq: list[Exp]


@dataclass
class AssignExp:
    pos: int
    var: Var
    exp: Exp


@dataclass
class IfExp:
    pos: int
    test: Exp
    then: Exp
    orelse: Optional[Exp] = None


@dataclass
class WhileExp:
    pos: int
    test: Exp
    body: Exp


@dataclass
class ForExp:
    pos: int
    var: Symbol
    lo: Exp
    hi: Exp
    body: Exp
    escape: bool = True


@dataclass
class BreakExp:
    pos: int


@dataclass
class LetExp:
    pos: int
    decs: list[Dec]
    body: Exp


@dataclass
class ArrayExp:
    pos: int
    typ: Symbol
    size: Exp
    init: Exp


# Declarations


@dataclass
class FunctionDec:
    pos: int
    functions: list[Fundec]


@dataclass
class VarDec:
    """A variable declaration; ``escape`` may change after construction."""

    pos: int
    var: Symbol
    typ: Optional[Symbol]
    init: Exp
    escape: bool = True


@dataclass
class TypeDec:
    pos: int
    types: list[Namety]


# Type expressions


@dataclass
class NameTy:
    pos: int
    name: Symbol


@dataclass
class RecordTy:
    pos: int
    record: list[Field]


@dataclass
class ArrayTy:
    pos: int
    array: Symbol


# List elements


@dataclass
class Field:
    pos: int
    name: Symbol
    typ: Symbol
    escape: bool = True


@dataclass
class Fundec:
    pos: int
    name: Symbol
    params: list[Field]
    result: Optional[Symbol]
    body: Exp


@dataclass
class Namety:
    name: Symbol
    ty: Ty


@dataclass
class Efield:
    name: Symbol
    exp: Exp


Var = Union[SimpleVar, FieldVar, SubscriptVar]
Exp = Union[
    VarExp,
    NilExp,
    IntExp,
    StringExp,
    CallExp,
    OpExp,
    RecordExp,
    SeqExp,
    AssignExp,
    IfExp,
    WhileExp,
    ForExp,
    BreakExp,
    LetExp,
    ArrayExp,
]
Dec = Union[FunctionDec, VarDec, TypeDec]
Ty = Union[NameTy, RecordTy, ArrayTy]