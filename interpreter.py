import logging
import sys

from basic_ast import *
from parser import parse_expression_text
from program import Program, NO_LINE
from config import INT_MIN, INT_MAX, INPUT_PROMPT
from errors import (
    BasicError, SYNTAX_ERROR, VARIABLE_NOT_DEFINED, DIVIDE_BY_ZERO,
    INTEGER_OVERFLOW, EXECUTION_LIMIT,
)

logger = logging.getLogger(__name__)


class EvalState:
    def __init__(self):
        self.variables = {}

    def get_value(self, name):
        if name not in self.variables:
            raise BasicError(VARIABLE_NOT_DEFINED)
        return self.variables[name]

    def set_value(self, name, value):
        self.variables[name] = value

    def is_defined(self, name):
        return name in self.variables

    def clear(self):
        self.variables.clear()

    def snapshot(self):
        return dict(sorted(self.variables.items()))


def _check_range(value):
    if not INT_MIN <= value <= INT_MAX:
        raise BasicError(INTEGER_OVERFLOW)
    return value


def evaluate(expr, state):
    try:
        return _evaluate(expr, state)
    except RecursionError:
        # árvore profunda demais (ex.: 1+1+...+1 com milhares de termos)
        raise BasicError(SYNTAX_ERROR) from None


def _evaluate(expr, state):
    if isinstance(expr, Number):
        return expr.value
    elif isinstance(expr, Variable):
        return state.get_value(expr.name)
    elif isinstance(expr, BinaryOp):
        left_val = _evaluate(expr.left, state)
        right_val = _evaluate(expr.right, state)

        if expr.op == '+': return _check_range(left_val + right_val)
        if expr.op == '-': return _check_range(left_val - right_val)
        if expr.op == '*': return _check_range(left_val * right_val)
        if expr.op == '/':
            if right_val == 0:
                raise BasicError(DIVIDE_BY_ZERO)
            # truncamento em direção a zero, não floor
            quotient = abs(left_val) // abs(right_val)
            if (left_val < 0) != (right_val < 0):
                quotient = -quotient
            return _check_range(quotient)
        raise BasicError(SYNTAX_ERROR)
    elif isinstance(expr, Assignment):
        value = _evaluate(expr.value, state)
        state.set_value(expr.name, value)
        return value
    else:
        raise BasicError(SYNTAX_ERROR)


def evaluate_condition(left_val, op, right_val):
    if op == '=': return left_val == right_val
    if op == '<': return left_val < right_val
    if op == '>': return left_val > right_val
    raise BasicError(SYNTAX_ERROR)


def parse_input_number(text):
    """Aceita sinal opcional seguido de dígitos; None se o texto não for um inteiro válido."""
    text = text.strip()
    digits = text[1:] if text[:1] in ('+', '-') else text
    if not digits or not all('0' <= ch <= '9' for ch in digits):
        return None
    value = int(text)
    if not INT_MIN <= value <= INT_MAX:
        return None
    return value


class Interpreter:
    def __init__(self, program=None, state=None, input_stream=None, output=None,
                 input_prompt=INPUT_PROMPT, max_steps=None):
        self.program = program if program is not None else Program()
        self.state = state if state is not None else EvalState()
        self.input_stream = iter(input_stream) if input_stream is not None else None
        self.output = output
        self.input_prompt = input_prompt
        self.max_steps = max_steps

    def write(self, text):
        out = self.output if self.output is not None else sys.stdout
        out.write(text)
        out.flush()

    def _read_line(self):
        source = self.input_stream if self.input_stream is not None else sys.stdin
        try:
            return next(source)
        except StopIteration:
            return None

    def _handle_input(self, stmt):
        while True:
            self.write(self.input_prompt)
            line = self._read_line()
            if line is None:
                # fim da entrada: variável recebe zero
                self.state.set_value(stmt.var, 0)
                return
            value = parse_input_number(line)
            if value is None:
                self.write("INVALID NUMBER\n")
                continue
            self.state.set_value(stmt.var, value)
            return

    def execute(self, stmt):
        if isinstance(stmt, RemStatement):
            pass

        elif isinstance(stmt, LetStatement):
            evaluate(stmt.expr, self.state)

        elif isinstance(stmt, PrintStatement):
            self.write(f"{evaluate(stmt.expr, self.state)}\n")

        elif isinstance(stmt, InputStatement):
            self._handle_input(stmt)

        elif isinstance(stmt, EndStatement):
            self.program.request_stop()

        elif isinstance(stmt, GotoStatement):
            self.program.request_jump(stmt.target)

        elif isinstance(stmt, IfStatement):
            left_val = evaluate(parse_expression_text(stmt.lhs_text), self.state)
            right_val = evaluate(parse_expression_text(stmt.rhs_text), self.state)
            if evaluate_condition(left_val, stmt.op, right_val):
                self.program.request_jump(stmt.target)

        else:
            raise BasicError(SYNTAX_ERROR)

    def run(self):
        program = self.program
        program.clear_pending_jump()
        program.clear_stop()

        current = program.get_first_line_number()
        steps = 0
        logger.debug("RUN a partir da linha %d", current)

        while current != NO_LINE:
            stmt = program.get_parsed_statement(current)
            if stmt is None:
                raise BasicError(SYNTAX_ERROR, line=current)

            steps += 1
            if self.max_steps is not None and steps > self.max_steps:
                raise BasicError(EXECUTION_LIMIT, line=current)

            self.execute(stmt)

            if program.stop_requested:
                program.clear_stop()
                break

            if program.has_pending_jump():
                logger.debug("Salto da linha %d para %d", current, program.pending_jump)
                current = program.pending_jump
                program.clear_pending_jump()
            else:
                current = program.get_next_line_number(current)

        logger.debug("RUN terminado após %d comandos", steps)
