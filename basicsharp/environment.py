from typing import Dict

from basicsharp.errors import InterpreterError
from basicsharp.tokens import Position
from basicsharp.types import Value


class Environment:
    """The global variable table of one interpreter.

    There is a single flat scope: blocks, ifs and loops do not introduce
    new variables, and nothing is ever removed.
    """
    def __init__(self):
        self.values: Dict[str, Value] = {}

    def get(self, name: str, position: Position) -> Value:
        if name in self.values:
            return self.values[name]
        raise InterpreterError(f"Variable '{name}' is not defined.", position)

    def set(self, name: str, value: Value):
        self.values[name] = value

    def __contains__(self, name: str) -> bool:
        return name in self.values
