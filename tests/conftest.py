import pytest

from jlisp.builtin.console import BufferedConsole
from jlisp.interpreter import Interpreter


@pytest.fixture
def console():
    return BufferedConsole()


@pytest.fixture
def bare(console):
    """Interpreter with builtins and native macros only."""
    return Interpreter(prelude=None, console=console)


@pytest.fixture
def env(bare):
    """Fresh root environment with every builtin and native macro registered."""
    return bare.new_environment()
