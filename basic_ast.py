class Number:
    def __init__(self, value):
        self.value = value

class Variable:
    def __init__(self, name):
        self.name = name

class BinaryOp:
    def __init__(self, left, op, right):
        self.left = left
        self.op = op
        self.right = right

class Assignment:
    def __init__(self, name, value):
        self.name = name
        self.value = value

class RemStatement:
    def __init__(self, comment=''):
        self.comment = comment

class LetStatement:
    def __init__(self, expr):
        self.expr = expr

class PrintStatement:
    def __init__(self, expr):
        self.expr = expr

class InputStatement:
    def __init__(self, var):
        self.var = var

class EndStatement:
    pass

class GotoStatement:
    def __init__(self, target):
        self.target = target

class IfStatement:
    """Os operandos ficam como texto e são reanalisados a cada execução."""
    def __init__(self, lhs_text, op, rhs_text, target):
        self.lhs_text = lhs_text
        self.op = op
        self.rhs_text = rhs_text
        self.target = target

