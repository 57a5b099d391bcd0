import sys
from io import StringIO
from pathlib import Path

import pytest

# Módulos ficam na raiz do projeto
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from session import BasicSession
from program import Program
from interpreter import EvalState, Interpreter


@pytest.fixture
def output():
    return StringIO()


@pytest.fixture
def program():
    return Program()


@pytest.fixture
def state():
    return EvalState()


@pytest.fixture
def make_interpreter(program, state, output):
    """Interpretador com entrada fixa e saída num buffer."""
    def factory(inputs=(), max_steps=None):
        return Interpreter(program, state, input_stream=list(inputs), output=output, max_steps=max_steps)
    return factory


@pytest.fixture
def make_session(output):
    def factory(inputs=(), max_steps=None):
        return BasicSession(input_stream=list(inputs), output=output, max_steps=max_steps)
    return factory
