SYNTAX_ERROR = "SYNTAX ERROR"
LINE_NUMBER_ERROR = "LINE NUMBER ERROR"
VARIABLE_NOT_DEFINED = "VARIABLE NOT DEFINED"
DIVIDE_BY_ZERO = "DIVIDE BY ZERO"
INTEGER_OVERFLOW = "INTEGER OVERFLOW"
EXECUTION_LIMIT = "EXECUTION LIMIT EXCEEDED"


class BasicError(Exception):
    """Falha única do interpretador; a mensagem é exatamente o que o console imprime."""
    def __init__(self, message, line=None):
        super().__init__(message)
        self.message = message
        self.line = line
