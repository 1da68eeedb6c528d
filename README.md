# tigerc

`tigerc` is a library for the front end of a compiler for Tiger, the small
imperative language with records, arrays, nested functions and lexical
scoping. It works on syntax trees that you build in Python; it provides:

- **Abstract syntax** (`tigerc.absyn`): one dataclass per kind of variable
  (`SimpleVar`, `FieldVar`, `SubscriptVar`), expression (`VarExp`, `NilExp`,
  `IntExp`, `StringExp`, `CallExp`, `OpExp`, `RecordExp`, `SeqExp`,
  `AssignExp`, `IfExp`, `WhileExp`, `ForExp`, `BreakExp`, `LetExp`,
  `ArrayExp`), declaration (`FunctionDec`, `VarDec`, `TypeDec`) and type
  expression (`NameTy`, `RecordTy`, `ArrayTy`), plus the list elements
  `Field`, `Fundec`, `Namety` and `Efield`. Sequences are plain Python lists;
  the binary operators are the `Oper` enumeration.
- **Symbols and scoped tables** (`tigerc.symbol`): `symbol(name)` returns an
  interned `Symbol`, so the same name always gives the same object.
  `ScopedTable` maps symbols to values: `enter` adds a binding that shadows
  older ones, `look` returns the newest binding or `None`, `pop` removes the
  newest binding and returns its symbol, `begin_scope()` / `end_scope()`
  discard every binding made inside a scope, and `dump()` yields every
  `(symbol, value)` pair, shadowed ones included, newest first.
- **Error reporting** (`tigerc.errormsg`): `ErrorReporter` turns character
  positions into `file:line.column: message` lines. Lines go to the stream
  given to the constructor, or to standard error; `error()` also returns the
  line it wrote and sets `any_errors`. `newline()` records that a line starts
  at `tok_pos`, and `reset(filename)` starts a fresh file and returns its
  text (reporting "cannot open" and re-raising `OSError` if it cannot).
- **Semantic types** (`tigerc.semtypes`): `Ty`, `TyKind`, `TyField` and the
  constructors `int_ty()`, `string_ty()`, `nil_ty()`, `void_ty()`,
  `record_ty(fields)`, `array_ty(element)` and `name_ty(sym, ty)`. Types
  compare by identity: every constructor call makes a distinct type.
- **Environments** (`tigerc.env`): `base_tenv()` holds the built-in types
  `int` and `string`; `base_venv()` holds the standard library functions
  `print`, `flush`, `getchar`, `ord`, `chr`, `size`, `substring`, `concat`,
  `not` and `exit` as `FunEntry` values. Variables are bound as `VarEntry`.
- **Pretty printing** (`tigerc.prabsyn`): `format_exp(exp, depth=0)` renders
  an expression tree as indented text, and `print_exp(out, exp, depth=0)`
  writes the same text to a file object.
- **Type checking** (`tigerc.semant`): `trans_prog(exp, errors=None)` checks a
  whole program against the base environments and returns an `ExpTy` holding
  its type, reporting problems through the given `ErrorReporter`. The
  `Analyzer` class exposes the individual steps (`trans_exp`, `trans_var`,
  `trans_dec`, `trans_ty`, `make_formal_ty_list`), and `actual_ty(ty)`
  follows named types to the type they stand for.

## Example

```python
import io

from tigerc import absyn
from tigerc.errormsg import ErrorReporter
from tigerc.prabsyn import format_exp
from tigerc.semant import trans_prog
from tigerc.semtypes import TyKind
from tigerc.symbol import symbol

program = absyn.LetExp(
    0,
    [absyn.VarDec(4, symbol("x"), None, absyn.IntExp(13, 1))],
    absyn.OpExp(
        20,
        absyn.Oper.PLUS,
        absyn.VarExp(18, absyn.SimpleVar(18, symbol("x"))),
        absyn.IntExp(22, 2),
    ),
)

print(format_exp(program))

errors = ErrorReporter(io.StringIO())
result = trans_prog(program, errors)
assert result.ty.kind is TyKind.INT
assert not errors.any_errors
```

## Scoped tables

```python
from tigerc.symbol import ScopedTable, symbol

table = ScopedTable()
x = symbol("x")

table.enter(x, "outer")
table.begin_scope()
table.enter(x, "inner")
assert table.look(x) == "inner"
table.end_scope()
assert table.look(x) == "outer"
assert symbol("x") is x
```

## What the checker reports

The checker keeps going after an error, substituting a fallback type (usually
`int`) so that one mistake does not hide the rest. It reports undefined
variables, functions and types; argument type mismatches and too many or too
few arguments; non-integer operands to arithmetic; incomparable operands to
`=` and `<>`; non-int, non-string operands to ordering comparisons;
non-integer conditions, loop bounds, array sizes and subscripts; mismatched
`then` and `else` branches; assignments of the wrong type; field access on
non-records and subscripts on non-arrays; unknown or mistyped record fields;
array initialisers of the wrong type; and record or array constructors whose
type is not a record or array type.

## What it does not do

- There is no lexer or parser: the package cannot read Tiger source text.
  Syntax trees are built directly from the `tigerc.absyn` classes.
- There is no command-line program.
- Type checking stops at types: `ExpTy.exp` is always `None`, and nothing
  produces intermediate code or machine code.
- In a group of type or function declarations only the first member is
  entered, so mutually recursive types and functions are not supported.

The package has no dependencies outside the standard library. Its tests use
pytest, available through the `test` extra.