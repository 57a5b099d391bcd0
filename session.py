import logging

from lexer import TokenStream, TokenType
from parser import parse_statement
from program import Program
from interpreter import Interpreter, EvalState
from config import INPUT_PROMPT
from errors import BasicError, SYNTAX_ERROR

logger = logging.getLogger(__name__)

HELP_TEXT = """\
Comandos:
  <n> <comando>   guarda a linha n do programa
  <n>             apaga a linha n
  RUN             executa o programa
  LIST            lista o programa
  CLEAR           apaga programa e variáveis
  QUIT            encerra a sessão
  LET / PRINT / INPUT podem ser usados diretamente
Comandos de programa: REM LET PRINT INPUT END GOTO IF ... THEN
"""

IMMEDIATE_STATEMENTS = ('REM', 'LET', 'PRINT', 'INPUT')


class BasicSession:
    """
    Despacha cada linha digitada: linhas numeradas editam o programa,
    o resto é comando imediato. QUIT devolve False em vez de encerrar o processo.
    """
    def __init__(self, input_stream=None, output=None, input_prompt=INPUT_PROMPT, max_steps=None):
        self.program = Program()
        self.state = EvalState()
        self.interpreter = Interpreter(
            self.program, self.state,
            input_stream=input_stream, output=output,
            input_prompt=input_prompt, max_steps=max_steps,
        )

    def write(self, text):
        self.interpreter.write(text)

    def _store_line(self, line, number, stream):
        if number <= 0:
            raise BasicError(SYNTAX_ERROR)
        if not stream.has_more():
            self.program.remove_line(number)
            return

        keyword = stream.next()
        if keyword.type != TokenType.WORD:
            raise BasicError(SYNTAX_ERROR, line=number)
        stmt = parse_statement(keyword.value, stream)

        self.program.add_line(number, line)
        self.program.set_parsed_statement(number, stmt)

    def process_line(self, line):
        line = line.rstrip('\r\n')
        stream = TokenStream.from_text(line)
        if not stream.has_more():
            return True

        first = stream.next()
        if first.type == TokenType.NUMBER:
            self._store_line(line, int(first.value), stream)
            return True

        command = first.value.upper() if first.type == TokenType.WORD else first.value

        if command in IMMEDIATE_STATEMENTS:
            self.interpreter.execute(parse_statement(command, stream))
            return True

        if command in ('LIST', 'CLEAR', 'RUN', 'QUIT', 'HELP') and stream.has_more():
            raise BasicError(SYNTAX_ERROR)

        if command == 'LIST':
            for number in self.program.line_numbers():
                self.write(self.program.get_source_line(number) + "\n")
        elif command == 'CLEAR':
            self.program.clear()
            self.state.clear()
        elif command == 'RUN':
            self.interpreter.run()
        elif command == 'HELP':
            self.write(HELP_TEXT)
        elif command == 'QUIT':
            logger.debug("QUIT recebido")
            return False
        else:
            raise BasicError(SYNTAX_ERROR)
        return True

    def repl(self, lines):
        """Laço de leitura: imprime a mensagem de cada erro e continua."""
        for line in lines:
            try:
                if not self.process_line(line):
                    return
            except BasicError as e:
                logger.debug("Erro na linha %r: %s", line, e.message)
                self.write(e.message + "\n")
