from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from jlisp import SExpression, Term
from jlisp.builtin.console import Console, StdConsole
from jlisp.builtin.env_builtin import register
from jlisp.config import get_prelude_root
from jlisp.errors import JLispError
from jlisp.evaluation.evaluator import evaluate
from jlisp.evaluation.expander import expand
from jlisp.evaluation.special_forms import register as register_macros
from jlisp.printer import to_string
from jlisp.reader.parser import parse
from jlisp.types.environment import Environment
from jlisp.types.nil import Nil

logger = logging.getLogger(__name__)

PRELUDE_FILES = ("macros.lisp", "functions.lisp")


@lru_cache(maxsize=None)
def read_prelude(root: Path) -> str:
    """Return the prelude text found in `root`, macros first."""
    parts = []
    for name in PRELUDE_FILES:
        path = root / name
        logger.debug("loading prelude file %s", path)
        parts.append(path.read_text(encoding="utf-8"))
    return "\n".join(parts)


class Interpreter:
    """
    Runs jlisp programs: prelude and program forms are expanded, then evaluated
    in order in one fresh root Environment per run.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        console: Console | None = None,
    ):
        self.console: Console = console if console is not None else StdConsole()

        if prelude is None:
            self.prelude_forms: list[SExpression] = []  # explicit: no prelude
        elif prelude == 'auto':
            try:
                self.prelude_forms = parse(read_prelude(get_prelude_root()))
            except FileNotFoundError as ex:
                # Be permissive: no prelude found -> proceed without it
                logger.warning("prelude not found (%s); running without it", ex.filename)
                self.prelude_forms = []
        else:
            self.prelude_forms = parse(prelude)

    def new_environment(self) -> Environment:
        """Create a root Environment holding every builtin and native macro."""
        env = Environment()
        register(env, self.console)
        register_macros(env.macros)
        return env

    def run(self, program: str) -> str:
        """Run `program` and return the printed form of its last value ("" if none)."""
        try:
            result = self.run_forms(self.prelude_forms + parse(program))
            return "" if result is None else to_string(result)
        except RecursionError as ex:
            raise JLispError("Maximum recursion depth exceeded") from ex

    def run_forms(self, forms: list[SExpression]) -> Term | None:
        """Expand then evaluate `forms` in a fresh environment; None if nothing ran."""
        env = self.new_environment()
        expanded = [expand(form, env) for form in forms]
        # defmacro forms expand to nil and take no part in evaluation
        expanded = [form for form in expanded if form is not Nil]
        logger.debug("evaluating %d top-level forms", len(expanded))
        result: Term | None = None
        for form in expanded:
            result = evaluate(form, env)
        return result


def run(program: str) -> str:
    """Run `program` after the standard prelude."""
    return Interpreter().run(program)


def run_without_includes(program: str) -> str:
    """Run `program` with builtins and native macros only."""
    return Interpreter(prelude=None).run(program)
