"""Abstract syntax, scoped symbol tables, pretty printing and type checking for the Tiger language."""

__version__ = "0.1.0"

__all__ = ["absyn", "env", "errormsg", "prabsyn", "semant", "semtypes", "symbol"]