import logging

from lexer import TokenStream, TokenType, is_keyword
from basic_ast import *
from errors import BasicError, SYNTAX_ERROR, INTEGER_OVERFLOW
from config import INT_MAX

logger = logging.getLogger(__name__)

RELATIONAL_OPS = ('<', '>', '=')

class Parser:
    """
    Analisador descendente recursivo de expressões:
        Expr   := Term (('+'|'-') Term)*
        Term   := Factor (('*'|'/') Factor)*
        Factor := '-' Factor | '(' Expr ')' | identificador | inteiro
    """
    def __init__(self, stream):
        self.stream = stream
        self.current_token = stream.peek()

    def advance(self):
        self.stream.next()
        self.current_token = self.stream.peek()

    def expect_operator(self, op):
        if not self.current_token.is_operator(op):
            raise BasicError(SYNTAX_ERROR)
        self.advance()

    def expect_end(self):
        if self.stream.has_more():
            raise BasicError(SYNTAX_ERROR)

    def parse_expression(self):
        left = self.parse_term()
        while self.current_token.type == TokenType.OPERATOR and self.current_token.value in ('+', '-'):
            op = self.current_token.value
            self.advance()
            left = BinaryOp(left, op, self.parse_term())
        return left

    def parse_term(self):
        left = self.parse_factor()
        while self.current_token.type == TokenType.OPERATOR and self.current_token.value in ('*', '/'):
            op = self.current_token.value
            self.advance()
            left = BinaryOp(left, op, self.parse_factor())
        return left

    def parse_factor(self):
        token = self.current_token

        if token.is_operator('-'):
            self.advance()
            return BinaryOp(Number(0), '-', self.parse_factor())

        if token.is_operator('('):
            self.advance()
            expr = self.parse_expression()
            self.expect_operator(')')
            return expr

        if token.type == TokenType.NUMBER:
            value = int(token.value)
            if value > INT_MAX:
                raise BasicError(INTEGER_OVERFLOW)
            self.advance()
            return Number(value)

        if token.type == TokenType.WORD and not is_keyword(token.value):
            self.advance()
            return Variable(token.value)

        raise BasicError(SYNTAX_ERROR)

    def parse_assignment(self):
        """Atribuição só existe no topo de um LET: identificador '=' Expr."""
        token = self.current_token
        if token.type != TokenType.WORD or is_keyword(token.value):
            raise BasicError(SYNTAX_ERROR)
        self.advance()
        self.expect_operator('=')
        return Assignment(token.value, self.parse_expression())


def parse_expression_text(text):
    stream = TokenStream.from_text(text)
    parser = Parser(stream)
    try:
        expr = parser.parse_expression()
    except RecursionError:
        raise BasicError(SYNTAX_ERROR) from None
    parser.expect_end()
    return expr


def _parse_line_target(stream):
    token = stream.next()
    if token.type != TokenType.NUMBER or stream.has_more():
        raise BasicError(SYNTAX_ERROR)
    return int(token.value)


def _collect_until(stream, delimiters, match):
    """
    Junta tokens crus até o primeiro delimitador em profundidade zero de
    parênteses. Retorna (texto, delimitador) ou (texto, None) se acabar antes.
    """
    collected = []
    depth = 0
    while stream.has_more():
        token = stream.next()
        if token.is_operator('('):
            depth += 1
        elif token.is_operator(')'):
            depth -= 1
        if depth == 0 and match(token, delimiters):
            return ' '.join(collected), token.value
        collected.append(token.value)
    return ' '.join(collected), None


def _is_relop(token, ops):
    return token.type == TokenType.OPERATOR and token.value in ops


def _is_then(token, words):
    return token.type == TokenType.WORD and token.value.upper() in words


def parse_statement(keyword, stream):
    """
    Constrói o comando a partir dos tokens que seguem a palavra-chave.
    Tudo ou nada: qualquer falha levanta BasicError antes de existir um comando.
    """
    try:
        return _build_statement(keyword.upper(), stream)
    except RecursionError:
        # aninhamento profundo demais para o analisador recursivo
        raise BasicError(SYNTAX_ERROR) from None


def _build_statement(keyword, stream):
    if keyword == 'REM':
        return RemStatement(' '.join(token.value for token in stream.rest()))

    elif keyword == 'LET':
        parser = Parser(stream)
        expr = parser.parse_assignment()
        parser.expect_end()
        return LetStatement(expr)

    elif keyword == 'PRINT':
        parser = Parser(stream)
        expr = parser.parse_expression()
        parser.expect_end()
        return PrintStatement(expr)

    elif keyword == 'INPUT':
        token = stream.next()
        if token.type != TokenType.WORD or is_keyword(token.value) or stream.has_more():
            raise BasicError(SYNTAX_ERROR)
        return InputStatement(token.value)

    elif keyword == 'END':
        if stream.has_more():
            raise BasicError(SYNTAX_ERROR)
        return EndStatement()

    elif keyword == 'GOTO':
        return GotoStatement(_parse_line_target(stream))

    elif keyword == 'IF':
        lhs_text, op = _collect_until(stream, RELATIONAL_OPS, _is_relop)
        if op is None:
            raise BasicError(SYNTAX_ERROR)
        rhs_text, then = _collect_until(stream, ('THEN',), _is_then)
        if then is None:
            raise BasicError(SYNTAX_ERROR)
        target = _parse_line_target(stream)
        return IfStatement(lhs_text, op, rhs_text, target)

    logger.debug("Palavra-chave desconhecida: %r", keyword)
    raise BasicError(SYNTAX_ERROR)
