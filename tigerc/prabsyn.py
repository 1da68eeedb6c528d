"""Render abstract syntax trees as indented text."""

from __future__ import annotations

from typing import Callable, Sequence, TextIO, TypeVar

from tigerc import absyn
from tigerc.absyn import Oper

T = TypeVar("T")

_OPER_NAMES = {
    Oper.PLUS: "PLUS",
    Oper.MINUS: "MINUS",
    Oper.TIMES: "TIMES",
    Oper.DIVIDE: "DIVIDE",
    Oper.EQ: "EQUAL",
    Oper.NEQ: "NOTEQUAL",
    Oper.LT: "LESSTHAN",
    Oper.LE: "LESSEQ",
    Oper.GT: "GREAT",
    Oper.GE: "GREATEQ",
}


def _ind(d: int) -> str:
    return " " * (d + 1)


def _flag(escape: bool) -> str:
    return "TRUE)" if escape else "FALSE)"


def _list(
    label: str, items: Sequence[T], d: int, item: Callable[[T, int], str]
) -> str:
    if not items:
        return f"{_ind(d)}{label}()"
    return (
        f"{_ind(d)}{label}(\n{item(items[0], d + 1)},\n"
        f"{_list(label, items[1:], d + 1, item)})"
    )


def _var(v: absyn.Var, d: int) -> str:
    head = _ind(d)
    match v:
        case absyn.SimpleVar(sym=sym):
            return f"{head}simpleVar({sym.name})"
        case absyn.FieldVar(var=inner, sym=sym):
            return f"{head}fieldVar(\n{_var(inner, d + 1)},\n{_ind(d + 1)}{sym.name})"
        case absyn.SubscriptVar(var=inner, exp=exp):
            return f"{head}subscriptVar(\n{_var(inner, d + 1)},\n{_exp(exp, d + 1)})"
    raise TypeError(f"not a variable: {v!r}")


def _exp(e: absyn.Exp, d: int) -> str:
    head = _ind(d)
    sub = d + 1
    match e:
        case absyn.VarExp(var=var):
            return f"{head}varExp(\n{_var(var, sub)})"
        case absyn.NilExp():
            return f"{head}nilExp()"
        case absyn.IntExp(value=value):
            return f"{head}intExp({value})"
        case absyn.StringExp(value=value):
            return f"{head}stringExp({value})"
        case absyn.CallExp(func=func, args=args):
            return f"{head}callExp({func.name},\n{_list('expList', args, sub, _exp)})"
        case absyn.OpExp(oper=oper, left=left, right=right):
            return (
                f"{head}opExp(\n{_ind(sub)}{_OPER_NAMES[oper]},\n"
                f"{_exp(left, sub)},\n{_exp(right, sub)})"
            )
        case absyn.RecordExp(typ=typ, fields=fields):
            return (
                f"{head}recordExp({typ.name},\n"
                f"{_list('efieldList', fields, sub, _efield)})"
            )
        case absyn.SeqExp(seq=seq):
            return f"{head}seqExp(\n{_list('expList', seq, sub, _exp)})"
        case absyn.AssignExp(var=var, exp=exp):
            return f"{head}assignExp(\n{_var(var, sub)},\n{_exp(exp, sub)})"
        case absyn.IfExp(test=test, then=then, orelse=orelse):
            text = f"{head}iffExp(\n{_exp(test, sub)},\n{_exp(then, sub)}"
            if orelse is not None:
                text += f",\n{_exp(orelse, sub)}"
            return text + ")"
        case absyn.WhileExp(test=test, body=body):
            return f"{head}whileExp(\n{_exp(test, sub)},\n{_exp(body, sub)})\n"
        case absyn.ForExp(var=var, lo=lo, hi=hi, body=body, escape=escape):
            return (
                f"{head}forExp({var.name},\n{_exp(lo, sub)},\n{_exp(hi, sub)},\n"
                f"{_exp(body, sub)},\n{_ind(sub)}{_flag(escape)}"
            )
        case absyn.BreakExp():
            return f"{head}breakExp()"
        case absyn.LetExp(decs=decs, body=body):
            return (
                f"{head}letExp(\n{_list('decList', decs, sub, _dec)},\n"
                f"{_exp(body, sub)})"
            )
        case absyn.ArrayExp(typ=typ, size=size, init=init):
            return (
                f"{head}arrayExp({typ.name},\n{_exp(size, sub)},\n{_exp(init, sub)})"
            )
    raise TypeError(f"not an expression: {e!r}")


def _dec(dec: absyn.Dec, d: int) -> str:
    head = _ind(d)
    sub = d + 1
    match dec:
        case absyn.FunctionDec(functions=functions):
            return (
                f"{head}functionDec(\n"
                f"{_list('fundecList', functions, sub, _fundec)})"
            )
        case absyn.VarDec(var=var, typ=typ, init=init, escape=escape):
            text = f"{head}varDec({var.name},\n"
            if typ is not None:
                text += f"{_ind(sub)}{typ.name},\n"
            return text + f"{_exp(init, sub)},\n{_ind(sub)}{_flag(escape)}"
        case absyn.TypeDec(types=types):
            return f"{head}typeDec(\n{_list('nametyList', types, sub, _namety)})"
    raise TypeError(f"not a declaration: {dec!r}")


def _ty(ty: absyn.Ty, d: int) -> str:
    head = _ind(d)
    match ty:
        case absyn.NameTy(name=name):
            return f"{head}nameTy({name.name})"
        case absyn.RecordTy(record=record):
            return f"{head}recordTy(\n{_list('fieldList', record, d + 1, _field)})"
        case absyn.ArrayTy(array=array):
            return f"{head}arrayTy({array.name})"
    raise TypeError(f"not a type expression: {ty!r}")


def _field(f: absyn.Field, d: int) -> str:
    return (
        f"{_ind(d)}field({f.name.name},\n{_ind(d + 1)}{f.typ.name},\n"
        f"{_ind(d + 1)}{_flag(f.escape)}"
    )


def _fundec(f: absyn.Fundec, d: int) -> str:
    text = f"{_ind(d)}fundec({f.name.name},\n{_list('fieldList', f.params, d + 1, _field)},\n"
    if f.result is not None:
        text += f"{_ind(d + 1)}{f.result.name},\n"
    return text + f"{_exp(f.body, d + 1)})"


def _namety(n: absyn.Namety, d: int) -> str:
    return f"{_ind(d)}namety({n.name.name},\n{_ty(n.ty, d + 1)})"


def _efield(f: absyn.Efield, d: int) -> str:
    return f"{_ind(d)}efield({f.name.name},\n{_exp(f.exp, d + 1)})"


def format_exp(exp: absyn.Exp, depth: int = 0) -> str:
    """Return the indented text of ``exp`` at nesting ``depth``."""
    return _exp(exp, depth)


def print_exp(out: TextIO, exp: absyn.Exp, depth: int = 0) -> None:
    """Write the indented text of ``exp`` to ``out``."""
    out.write(format_exp(exp, depth))