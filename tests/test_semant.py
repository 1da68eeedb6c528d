import io

import pytest

from tigerc import absyn
from tigerc.absyn import Oper
from tigerc.env import base_tenv, base_venv
from tigerc.errormsg import ErrorReporter
from tigerc.semant import Analyzer, ExpTy, actual_ty, trans_prog
from tigerc.semtypes import TyKind, int_ty, name_ty, string_ty
from tigerc.symbol import ScopedTable, symbol


def run(exp):
    stream = io.StringIO()
    errors = ErrorReporter(stream)
    result = trans_prog(exp, errors)
    return result, errors, stream.getvalue()


def num(n=1, pos=0):
    return absyn.IntExp(pos, n)


def text(s="a", pos=0):
    return absyn.StringExp(pos, s)


def var(name, pos=0):
    return absyn.VarExp(pos, absyn.SimpleVar(pos, symbol(name)))


def call(name, *args):
    return absyn.CallExp(0, symbol(name), list(args))


def let(decs, body):
    return absyn.LetExp(0, decs, body)


def vardec(name, init):
    return absyn.VarDec(0, symbol(name), None, init)


def typedec(name, ty):
    return absyn.TypeDec(0, [absyn.Namety(symbol(name), ty)])


def rec_type(**fields):
    return absyn.RecordTy(
        0, [absyn.Field(0, symbol(n), symbol(t)) for n, t in fields.items()]
    )


def test_literals():
    assert run(num())[0].ty.kind is TyKind.INT
    assert run(text())[0].ty.kind is TyKind.STRING
    assert run(absyn.NilExp(0))[0].ty.kind is TyKind.NIL
    assert run(absyn.BreakExp(0))[0].ty.kind is TyKind.VOID


def test_undefined_variable():
    result, errors, out = run(var("x"))
    assert result.ty.kind is TyKind.INT
    assert errors.any_errors
    assert "undefined variable x" in out


def test_let_variable_has_init_type():
    result, errors, _ = run(let([vardec("x", text())], var("x")))
    assert result.ty.kind is TyKind.STRING
    assert not errors.any_errors


def test_let_scope_is_removed():
    venv, tenv = base_venv(), base_tenv()
    analyzer = Analyzer(ErrorReporter(io.StringIO()))
    analyzer.trans_exp(venv, tenv, let([vardec("x", num())], var("x")))
    assert venv.look(symbol("x")) is None
    assert venv.look(symbol("print")) is not None


def test_builtin_call_result():
    result, errors, _ = run(call("size", text()))
    assert result.ty.kind is TyKind.INT
    assert not errors.any_errors


@pytest.mark.parametrize(
    "exp, message",
    [
        (call("print", num()), "argument type mismatch"),
        (call("print"), "too few arguments"),
        (call("print", text(), text()), "too many arguments"),
        (call("nosuch"), "undefined function nosuch"),
    ],
)
def test_call_errors(exp, message):
    _, errors, out = run(exp)
    assert errors.any_errors
    assert message in out


def test_arithmetic():
    ok, errors, _ = run(absyn.OpExp(0, Oper.PLUS, num(), num()))
    assert ok.ty.kind is TyKind.INT and not errors.any_errors
    _, errors, out = run(absyn.OpExp(0, Oper.TIMES, text(), num()))
    assert out.count("integer required") == 1


def test_equality():
    _, errors, _ = run(absyn.OpExp(0, Oper.EQ, text(), text()))
    assert not errors.any_errors
    _, errors, out = run(absyn.OpExp(0, Oper.NEQ, num(), text()))
    assert "incomparable types for equality operator" in out


def test_ordering():
    _, errors, _ = run(absyn.OpExp(0, Oper.LT, text(), text()))
    assert not errors.any_errors
    _, errors, out = run(absyn.OpExp(0, Oper.GE, absyn.NilExp(0), num()))
    assert "integer or string required for comparison operator" in out


def test_record_equality_with_nil():
    prog = let(
        [typedec("rec", rec_type(a="int")), vardec("r", absyn.NilExp(0))],
        absyn.OpExp(0, Oper.EQ, absyn.RecordExp(0, symbol("rec"), []), absyn.NilExp(0)),
    )
    result, errors, _ = run(prog)
    assert result.ty.kind is TyKind.INT
    assert not errors.any_errors


def test_record_creation():
    fields = [absyn.Efield(symbol("a"), num())]
    prog = let(
        [typedec("rec", rec_type(a="int"))],
        absyn.RecordExp(0, symbol("rec"), fields),
    )
    result, errors, _ = run(prog)
    assert result.ty.kind is TyKind.RECORD
    assert [f.name for f in result.ty.fields] == [symbol("a")]
    assert not errors.any_errors


def test_record_field_errors():
    fields = [absyn.Efield(symbol("a"), text()), absyn.Efield(symbol("b"), num())]
    prog = let(
        [typedec("rec", rec_type(a="int"))],
        absyn.RecordExp(0, symbol("rec"), fields),
    )
    _, _, out = run(prog)
    assert "field a has wrong type" in out
    assert "field b not found in record type" in out


def test_record_of_non_record_type():
    prog = let(
        [typedec("t", absyn.NameTy(0, symbol("int")))],
        absyn.RecordExp(0, symbol("t"), []),
    )
    result, _, out = run(prog)
    assert "t is not a record type" in out
    assert result.ty.kind is TyKind.RECORD


def test_record_of_undefined_type():
    result, _, out = run(absyn.RecordExp(0, symbol("nope"), []))
    assert "undefined type nope" in out
    assert result.ty.kind is TyKind.INT


def test_array_creation():
    prog = let(
        [typedec("arr", absyn.ArrayTy(0, symbol("int")))],
        absyn.ArrayExp(0, symbol("arr"), num(3), num(0)),
    )
    result, errors, _ = run(prog)
    assert result.ty.kind is TyKind.ARRAY
    assert result.ty.element.kind is TyKind.INT
    assert not errors.any_errors


def test_array_errors():
    prog = let(
        [typedec("arr", absyn.ArrayTy(0, symbol("int")))],
        absyn.ArrayExp(0, symbol("arr"), text(), text()),
    )
    _, _, out = run(prog)
    assert "integer required for array size" in out
    assert "type mismatch in array initializer" in out


def test_array_of_non_array_type():
    result, _, out = run(absyn.ArrayExp(0, symbol("int"), num(), num()))
    assert "int is not an array type" in out
    assert result.ty.kind is TyKind.ARRAY


def test_seq_returns_last():
    assert run(absyn.SeqExp(0, [num(), text()]))[0].ty.kind is TyKind.STRING
    assert run(absyn.SeqExp(0, []))[0].ty.kind is TyKind.VOID


def test_if_expressions():
    result, errors, _ = run(absyn.IfExp(0, num(), text(), text()))
    assert result.ty.kind is TyKind.STRING and not errors.any_errors
    assert run(absyn.IfExp(0, num(), num()))[0].ty.kind is TyKind.VOID
    _, _, out = run(absyn.IfExp(0, text(), num(), text()))
    assert "integer (boolean) required for condition" in out
    assert "then and else expressions must have same type" in out


def test_while_condition():
    result, _, out = run(absyn.WhileExp(0, text(), num()))
    assert result.ty.kind is TyKind.VOID
    assert "integer (boolean) required for condition" in out


def test_for_loop_variable_scope():
    loop = absyn.ForExp(0, symbol("i"), num(), num(), var("i"))
    result, errors, _ = run(loop)
    assert result.ty.kind is TyKind.VOID and not errors.any_errors
    _, _, out = run(absyn.SeqExp(0, [loop, var("i")]))
    assert out.count("undefined variable i") == 1


def test_for_bounds():
    _, _, out = run(absyn.ForExp(0, symbol("i"), text(), text(), num()))
    assert "integer required for lower bound" in out
    assert "integer required for upper bound" in out


def test_assignment():
    target = absyn.SimpleVar(0, symbol("x"))
    result, errors, _ = run(let([vardec("x", num())], absyn.AssignExp(0, target, num())))
    assert result.ty.kind is TyKind.VOID and not errors.any_errors
    _, _, out = run(let([vardec("x", num())], absyn.AssignExp(0, target, text())))
    assert "type mismatch in assignment" in out


def test_function_declaration_and_call():
    fundec = absyn.Fundec(
        0,
        symbol("f"),
        [absyn.Field(0, symbol("a"), symbol("int"))],
        symbol("string"),
        var("a"),
    )
    prog = let([absyn.FunctionDec(0, [fundec])], call("f", num()))
    result, errors, _ = run(prog)
    assert result.ty.kind is TyKind.STRING
    assert not errors.any_errors


def test_function_params_not_visible_after():
    fundec = absyn.Fundec(
        0, symbol("g"), [absyn.Field(0, symbol("p"), symbol("int"))], None, var("p")
    )
    prog = let([absyn.FunctionDec(0, [fundec])], absyn.SeqExp(0, [call("g", num()), var("p")]))
    _, _, out = run(prog)
    assert out.count("undefined variable p") == 1


def test_field_and_subscript_vars():
    rvar = absyn.SimpleVar(0, symbol("r"))
    prog = let(
        [
            typedec("rec", rec_type(a="string")),
            vardec("r", absyn.RecordExp(0, symbol("rec"), [absyn.Efield(symbol("a"), text())])),
        ],
        absyn.VarExp(0, absyn.FieldVar(0, rvar, symbol("a"))),
    )
    result, errors, _ = run(prog)
    assert result.ty.kind is TyKind.STRING and not errors.any_errors

    avar = absyn.SimpleVar(0, symbol("v"))
    prog = let(
        [
            typedec("arr", absyn.ArrayTy(0, symbol("string"))),
            vardec("v", absyn.ArrayExp(0, symbol("arr"), num(2), text())),
        ],
        absyn.VarExp(0, absyn.SubscriptVar(0, avar, num())),
    )
    result, errors, _ = run(prog)
    assert result.ty.kind is TyKind.STRING and not errors.any_errors


def test_actual_ty():
    base = int_ty()
    chain = name_ty(symbol("b"), name_ty(symbol("a"), base))
    assert actual_ty(chain) is base
    unresolved = name_ty(symbol("c"), None)
    assert actual_ty(unresolved) is unresolved
    assert actual_ty(None) is None


def test_trans_ty_and_formals():
    stream = io.StringIO()
    analyzer = Analyzer(ErrorReporter(stream))
    tenv = base_tenv()
    ty = analyzer.trans_ty(tenv, absyn.NameTy(0, symbol("missing")))
    assert ty.kind is TyKind.INT
    assert "undefined type missing" in stream.getvalue()
    formals = analyzer.make_formal_ty_list(
        tenv,
        [absyn.Field(0, symbol("a"), symbol("string")), absyn.Field(0, symbol("b"), symbol("zz"))],
    )
    assert [f.kind for f in formals] == [TyKind.STRING, TyKind.INT]
    assert "undefined type zz" in stream.getvalue()


def test_type_declaration_enters_type():
    analyzer = Analyzer(ErrorReporter(io.StringIO()))
    venv, tenv = ScopedTable(), base_tenv()
    analyzer.trans_dec(venv, tenv, typedec("s", absyn.NameTy(0, symbol("string"))))
    assert tenv.look(symbol("s")) is tenv.look(symbol("string"))


def test_exp_ty_holds_values():
    ty = string_ty()
    pair = ExpTy(None, ty)
    assert pair.ty is ty and pair.exp is None