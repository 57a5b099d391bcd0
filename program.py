import bisect
import logging

from errors import BasicError, SYNTAX_ERROR, LINE_NUMBER_ERROR

logger = logging.getLogger(__name__)

NO_LINE = -1


class Program:
    """
    Armazena as linhas do programa (texto-fonte e comando analisado) em
    ordem crescente, além dos sinais transitórios de salto e parada.
    """
    def __init__(self):
        self.source_lines = {}
        self.parsed = {}
        self._numbers = []
        self.pending_jump = None
        self.stop_requested = False

    def clear(self):
        self.source_lines.clear()
        self.parsed.clear()
        self._numbers.clear()
        self.clear_pending_jump()
        self.clear_stop()

    def add_line(self, number, text):
        if number in self.source_lines:
            # substituir o texto invalida o comando analisado anterior
            self.parsed.pop(number, None)
        else:
            bisect.insort(self._numbers, number)
        self.source_lines[number] = text
        logger.debug("Linha %d instalada: %r", number, text)

    def remove_line(self, number):
        if number not in self.source_lines:
            return
        self.parsed.pop(number, None)
        del self.source_lines[number]
        self._numbers.remove(number)
        logger.debug("Linha %d removida", number)

    def get_source_line(self, number):
        return self.source_lines.get(number, "")

    def set_parsed_statement(self, number, stmt):
        if number not in self.source_lines:
            raise BasicError(SYNTAX_ERROR, line=number)
        self.parsed[number] = stmt

    def get_parsed_statement(self, number):
        return self.parsed.get(number)

    def has_line(self, number):
        return number in self.source_lines

    def line_numbers(self):
        return list(self._numbers)

    def get_first_line_number(self):
        return self._numbers[0] if self._numbers else NO_LINE

    def get_next_line_number(self, number):
        idx = bisect.bisect_right(self._numbers, number)
        return self._numbers[idx] if idx < len(self._numbers) else NO_LINE

    def request_jump(self, number):
        if not self.has_line(number):
            raise BasicError(LINE_NUMBER_ERROR, line=number)
        self.pending_jump = number

    def has_pending_jump(self):
        return self.pending_jump is not None

    def clear_pending_jump(self):
        self.pending_jump = None

    def request_stop(self):
        self.stop_requested = True

    def clear_stop(self):
        self.stop_requested = False
