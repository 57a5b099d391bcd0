from dataclasses import dataclass
from enum import Enum, auto

KEYWORDS = {
    'REM', 'LET', 'PRINT', 'INPUT', 'END', 'GOTO', 'IF', 'THEN',
    'RUN', 'LIST', 'CLEAR', 'QUIT', 'HELP',
}


def is_keyword(text):
    return text.upper() in KEYWORDS


# apenas dígitos e letras ASCII
def is_digit(ch):
    return '0' <= ch <= '9'


def is_word_char(ch):
    return ch.isascii() and (ch.isalnum() or ch == '_')


class TokenType(Enum):
    NUMBER = auto()
    WORD = auto()
    OPERATOR = auto()
    EOF = auto()

@dataclass
class Token:
    type: TokenType
    value: str
    column: int

    def is_operator(self, op):
        return self.type == TokenType.OPERATOR and self.value == op

class Lexer:
    def __init__(self, source, scan_numbers=True):
        self.source = source
        self.scan_numbers = scan_numbers
        self.pos = 0
        self.column = 1
        self.current_char = self.source[0] if source else None

    def advance(self):
        self.pos += 1
        self.column += 1
        if self.pos < len(self.source):
            self.current_char = self.source[self.pos]
        else:
            self.current_char = None

    def skip_whitespace(self):
        while self.current_char and self.current_char.isspace():
            self.advance()

    def number(self):
        start_pos = self.pos
        while self.current_char and is_digit(self.current_char):
            self.advance()
        return self.source[start_pos:self.pos]

    def word(self):
        start_pos = self.pos
        while self.current_char and is_word_char(self.current_char):
            self.advance()
        return self.source[start_pos:self.pos]

    def tokenize(self):
        tokens = []

        while self.current_char:
            start_column = self.column

            if self.current_char.isspace():
                self.skip_whitespace()
                continue

            if is_digit(self.current_char) and self.scan_numbers:
                tokens.append(Token(TokenType.NUMBER, self.number(), start_column))
                continue

            if is_word_char(self.current_char):
                tokens.append(Token(TokenType.WORD, self.word(), start_column))
                continue

            op = self.current_char
            self.advance()
            tokens.append(Token(TokenType.OPERATOR, op, start_column))

        tokens.append(Token(TokenType.EOF, '', self.column))
        return tokens


class TokenStream:
    """Cursor sobre a lista de tokens de uma linha; o EOF final nunca é consumido."""
    def __init__(self, tokens):
        if not tokens or tokens[-1].type != TokenType.EOF:
            tokens = list(tokens) + [Token(TokenType.EOF, '', 0)]
        self.tokens = tokens
        self.pos = 0

    @classmethod
    def from_text(cls, text, scan_numbers=True):
        return cls(Lexer(text, scan_numbers=scan_numbers).tokenize())

    def peek(self):
        return self.tokens[self.pos]

    def next(self):
        token = self.tokens[self.pos]
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def has_more(self):
        return self.tokens[self.pos].type != TokenType.EOF

    def rest(self):
        remaining = self.tokens[self.pos:-1]
        self.pos = len(self.tokens) - 1
        return remaining
