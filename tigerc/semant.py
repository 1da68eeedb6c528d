"""Type checking of Tiger abstract syntax trees."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from tigerc import absyn
from tigerc.absyn import Oper
from tigerc.env import FunEntry, VarEntry, base_tenv, base_venv
from tigerc.errormsg import ErrorReporter
from tigerc.semtypes import (
    Ty,
    TyField,
    TyKind,
    array_ty,
    int_ty,
    nil_ty,
    record_ty,
    string_ty,
    void_ty,
)
from tigerc.symbol import ScopedTable

_ARITHMETIC = {Oper.PLUS, Oper.MINUS, Oper.TIMES, Oper.DIVIDE}
_EQUALITY = {Oper.EQ, Oper.NEQ}
_ORDERING = {Oper.LT, Oper.LE, Oper.GT, Oper.GE}


@dataclass
class ExpTy:
    """The translation of an expression together with its type."""

    exp: Any
    ty: Ty


def actual_ty(ty: Optional[Ty]) -> Optional[Ty]:
    """Follow named types to the type they stand for.

    A named type whose binding is not yet filled in is returned as it is.
    """
    while ty is not None and ty.kind is TyKind.NAME:
        if ty.ty is None:
            return ty
        ty = ty.ty
    return ty


class Analyzer:
    """Checks expressions against type and value environments."""

    def __init__(self, errors: Optional[ErrorReporter] = None) -> None:
        self.errors = errors if errors is not None else ErrorReporter()

    def _error(self, pos: int, message: str, *args: object) -> None:
        self.errors.error(pos, message, *args)

    def make_formal_ty_list(
        self, tenv: ScopedTable, params: list[absyn.Field]
    ) -> list[Ty]:
        """Return the declared types of ``params``; unknown ones become int."""
        formals = []
        for param in params:
            ty = tenv.look(param.typ)
            if ty is None:
                self._error(param.pos, "undefined type %s", param.typ.name)
                ty = int_ty()
            formals.append(ty)
        return formals

    def trans_var(
        self, venv: ScopedTable, tenv: ScopedTable, var: absyn.Var
    ) -> ExpTy:
        """Type-check a variable reference."""
        match var:
            case absyn.SimpleVar(pos=pos, sym=sym):
                entry = venv.look(sym)
                if isinstance(entry, VarEntry):
                    return ExpTy(None, actual_ty(entry.ty))
                self._error(pos, "undefined variable %s", sym.name)
                return ExpTy(None, int_ty())
            case absyn.FieldVar(pos=pos, var=inner, sym=sym):
                base = self.trans_var(venv, tenv, inner).ty
                if base.kind is not TyKind.RECORD:
                    self._error(pos, "record type required")
                    return ExpTy(None, int_ty())
                for field in base.fields:
                    if field.name is sym:
                        return ExpTy(None, actual_ty(field.ty))
                self._error(pos, "field %s not found in record type", sym.name)
                return ExpTy(None, int_ty())
            case absyn.SubscriptVar(pos=pos, var=inner, exp=index):
                base = self.trans_var(venv, tenv, inner).ty
                index_ty = self.trans_exp(venv, tenv, index).ty
                if index_ty.kind is not TyKind.INT:
                    self._error(index.pos, "integer required for array subscript")
                if base.kind is not TyKind.ARRAY:
                    self._error(pos, "array type required")
                    return ExpTy(None, int_ty())
                return ExpTy(None, actual_ty(base.element))
        raise TypeError(f"not a variable: {var!r}")

    def trans_exp(
        self, venv: ScopedTable, tenv: ScopedTable, exp: absyn.Exp
    ) -> ExpTy:
        """Type-check an expression and return its type."""
        match exp:
            case absyn.VarExp(var=var):
                return self.trans_var(venv, tenv, var)
            case absyn.NilExp():
                return ExpTy(None, nil_ty())
            case absyn.IntExp():
                return ExpTy(None, int_ty())
            case absyn.StringExp():
                return ExpTy(None, string_ty())
            case absyn.CallExp():
                return self._trans_call(venv, tenv, exp)
            case absyn.OpExp():
                return self._trans_op(venv, tenv, exp)
            case absyn.RecordExp():
                return self._trans_record(venv, tenv, exp)
            case absyn.SeqExp(seq=seq):
                result = ExpTy(None, void_ty())
                for item in seq:
                    result = self.trans_exp(venv, tenv, item)
                return result
            case absyn.AssignExp(pos=pos, var=var, exp=value):
                var_ty = self.trans_var(venv, tenv, var).ty
                value_ty = self.trans_exp(venv, tenv, value).ty
                if var_ty.kind is not value_ty.kind and not (
                    var_ty.kind is TyKind.RECORD and value_ty.kind is TyKind.NIL
                ):
                    self._error(pos, "type mismatch in assignment")
                return ExpTy(None, void_ty())
            case absyn.IfExp(pos=pos, test=test, then=then, orelse=orelse):
                test_ty = self.trans_exp(venv, tenv, test).ty
                then_ty = self.trans_exp(venv, tenv, then).ty
                if test_ty.kind is not TyKind.INT:
                    self._error(test.pos, "integer (boolean) required for condition")
                if orelse is None:
                    return ExpTy(None, void_ty())
                else_ty = self.trans_exp(venv, tenv, orelse).ty
                if then_ty.kind is not else_ty.kind:
                    self._error(pos, "then and else expressions must have same type")
                return ExpTy(None, then_ty)
            case absyn.WhileExp(test=test, body=body):
                test_ty = self.trans_exp(venv, tenv, test).ty
                self.trans_exp(venv, tenv, body)
                if test_ty.kind is not TyKind.INT:
                    self._error(test.pos, "integer (boolean) required for condition")
                return ExpTy(None, void_ty())
            case absyn.ForExp(var=var, lo=lo, hi=hi, body=body):
                lo_ty = self.trans_exp(venv, tenv, lo).ty
                hi_ty = self.trans_exp(venv, tenv, hi).ty
                if lo_ty.kind is not TyKind.INT:
                    self._error(lo.pos, "integer required for lower bound")
                if hi_ty.kind is not TyKind.INT:
                    self._error(hi.pos, "integer required for upper bound")
                venv.begin_scope()
                venv.enter(var, VarEntry(int_ty()))
                self.trans_exp(venv, tenv, body)
                venv.end_scope()
                return ExpTy(None, void_ty())
            case absyn.BreakExp():
                return ExpTy(None, void_ty())
            case absyn.LetExp(decs=decs, body=body):
                venv.begin_scope()
                tenv.begin_scope()
                for dec in decs:
                    self.trans_dec(venv, tenv, dec)
                result = self.trans_exp(venv, tenv, body)
                tenv.end_scope()
                venv.end_scope()
                return result
            case absyn.ArrayExp():
                return self._trans_array(venv, tenv, exp)
        raise TypeError(f"not an expression: {exp!r}")

    def _trans_call(
        self, venv: ScopedTable, tenv: ScopedTable, exp: absyn.CallExp
    ) -> ExpTy:
        entry = venv.look(exp.func)
        if not isinstance(entry, FunEntry):
            self._error(exp.pos, "undefined function %s", exp.func.name)
            return ExpTy(None, int_ty())
        for arg, formal in zip(exp.args, entry.formals):
            arg_ty = self.trans_exp(venv, tenv, arg).ty
            if formal.kind is not arg_ty.kind:
                self._error(arg.pos, "argument type mismatch")
        if len(exp.args) > len(entry.formals):
            self._error(exp.pos, "too many arguments")
        elif len(exp.args) < len(entry.formals):
            self._error(exp.pos, "too few arguments")
        return ExpTy(None, entry.result)

    def _trans_op(
        self, venv: ScopedTable, tenv: ScopedTable, exp: absyn.OpExp
    ) -> ExpTy:
        left = self.trans_exp(venv, tenv, exp.left).ty
        right = self.trans_exp(venv, tenv, exp.right).ty
        lk, rk = left.kind, right.kind
        if exp.oper in _ARITHMETIC:
            if lk is not TyKind.INT:
                self._error(exp.left.pos, "integer required")
            if rk is not TyKind.INT:
                self._error(exp.right.pos, "integer required")
        elif exp.oper in _EQUALITY:
            comparable = (
                (lk is TyKind.INT and rk is TyKind.INT)
                or (lk is TyKind.STRING and rk is TyKind.STRING)
                or (lk is TyKind.RECORD and rk in (TyKind.RECORD, TyKind.NIL))
                or (rk is TyKind.RECORD and lk in (TyKind.RECORD, TyKind.NIL))
                or (
                    lk is TyKind.ARRAY
                    and rk is TyKind.ARRAY
                    and left.element is right.element
                )
            )
            if not comparable:
                self._error(exp.pos, "incomparable types for equality operator")
        elif exp.oper in _ORDERING:
            if not (
                (lk is TyKind.INT and rk is TyKind.INT)
                or (lk is TyKind.STRING and rk is TyKind.STRING)
            ):
                self._error(
                    exp.pos, "integer or string required for comparison operator"
                )
        else:
            self._error(exp.pos, "unknown operator")
        return ExpTy(None, int_ty())

    def _trans_record(
        self, venv: ScopedTable, tenv: ScopedTable, exp: absyn.RecordExp
    ) -> ExpTy:
        declared = tenv.look(exp.typ)
        if declared is None:
            self._error(exp.pos, "undefined type %s", exp.typ.name)
            return ExpTy(None, int_ty())
        rec = actual_ty(declared)
        if rec.kind is not TyKind.RECORD:
            self._error(exp.pos, "%s is not a record type", exp.typ.name)
            return ExpTy(None, record_ty(None))
        if rec.fields:
            for efield in exp.fields:
                match = next((f for f in rec.fields if f.name is efield.name), None)
                if match is None:
                    self._error(
                        exp.pos, "field %s not found in record type", efield.name.name
                    )
                    continue
                value_ty = self.trans_exp(venv, tenv, efield.exp).ty
                if value_ty.kind is not match.ty.kind:
                    self._error(exp.pos, "field %s has wrong type", efield.name.name)
        return ExpTy(None, rec)

    def _trans_array(
        self, venv: ScopedTable, tenv: ScopedTable, exp: absyn.ArrayExp
    ) -> ExpTy:
        declared = tenv.look(exp.typ)
        if declared is None:
            self._error(exp.pos, "undefined type %s", exp.typ.name)
            return ExpTy(None, array_ty(int_ty()))
        arr = actual_ty(declared)
        if arr.kind is not TyKind.ARRAY:
            self._error(exp.pos, "%s is not an array type", exp.typ.name)
            return ExpTy(None, array_ty(int_ty()))
        size_ty = self.trans_exp(venv, tenv, exp.size).ty
        if size_ty.kind is not TyKind.INT:
            self._error(exp.size.pos, "integer required for array size")
        init_ty = self.trans_exp(venv, tenv, exp.init).ty
        if init_ty.kind is not arr.element.kind:
            self._error(exp.init.pos, "type mismatch in array initializer")
        return ExpTy(None, arr)

    def trans_dec(
        self, venv: ScopedTable, tenv: ScopedTable, dec: absyn.Dec
    ) -> None:
        """Enter the bindings made by a declaration.

        Only the first member of a type or function declaration group is used.
        """
        match dec:
            case absyn.VarDec(var=var, init=init):
                init_ty = self.trans_exp(venv, tenv, init).ty
                venv.enter(var, VarEntry(init_ty))
            case absyn.TypeDec(types=types):
                if types:
                    first = types[0]
                    tenv.enter(first.name, self.trans_ty(tenv, first.ty))
            case absyn.FunctionDec(functions=functions):
                if functions:
                    self._trans_fundec(venv, tenv, functions[0])
            case _:
                raise TypeError(f"not a declaration: {dec!r}")

    def _trans_fundec(
        self, venv: ScopedTable, tenv: ScopedTable, fundec: absyn.Fundec
    ) -> None:
        if fundec.result is None:
            result = void_ty()
        else:
            result = tenv.look(fundec.result)
            if result is None:
                self._error(fundec.pos, "undefined type %s", fundec.result.name)
                result = int_ty()
        formals = self.make_formal_ty_list(tenv, fundec.params)
        venv.enter(fundec.name, FunEntry(formals, result))
        venv.begin_scope()
        for param, ty in zip(fundec.params, formals):
            venv.enter(param.name, VarEntry(ty))
        self.trans_exp(venv, tenv, fundec.body)
        venv.end_scope()

    def trans_ty(self, tenv: ScopedTable, ty: absyn.Ty) -> Ty:
        """Turn a type expression into a semantic type."""
        match ty:
            case absyn.NameTy(pos=pos, name=name):
                found = tenv.look(name)
                if found is not None:
                    return found
                self._error(pos, "undefined type %s", name.name)
                return int_ty()
            case absyn.RecordTy(record=record):
                fields = []
                for field in record:
                    field_ty = tenv.look(field.typ)
                    if field_ty is None:
                        self._error(field.pos, "undefined type %s", field.typ.name)
                        field_ty = int_ty()
                    fields.append(TyField(field.name, field_ty))
                return record_ty(fields)
            case absyn.ArrayTy(pos=pos, array=array):
                element = tenv.look(array)
                if element is not None:
                    return array_ty(element)
                self._error(pos, "undefined type %s", array.name)
                return array_ty(int_ty())
        raise TypeError(f"not a type expression: {ty!r}")


def trans_prog(exp: absyn.Exp, errors: Optional[ErrorReporter] = None) -> ExpTy:
    """Type-check a whole program in the predefined environments."""
    analyzer = Analyzer(errors)
    return analyzer.trans_exp(base_venv(), base_tenv(), exp)