# Core type aliases for jlisp's data model.
# Terms are represented with plain Python values where one fits:
#   Number -> float, String -> str, Boolean -> True/False, List -> list
# and dedicated classes where none does: Symbol, Nil and Function (see jlisp.types).
#
# Naming guidance:
# - SExpression: use in reader/expander code to denote syntactic forms (code-as-data).
# - Term:        use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any`; the language is homoiconic so they are interchangeable.

from typing import Any, Callable

# Runtime value alias
Term = Any
# Forms alias (often used interchangeably with Term)
SExpression = Term

# Evaluator function type: (term, env) -> Term
EvaluatorFn = Callable[..., Term]

__version__ = "0.3.0"
