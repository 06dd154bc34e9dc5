from dataclasses import dataclass

from basicsharp.tokens import Position


class BasicError(Exception):
    """Base class for errors reported against a position in the source."""
    kind = 'Basic'

    def __init__(self, message: str, position: Position):
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        return f"{self.kind} error (at {self.position}): {self.message}"


class LexerError(BasicError):
    kind = 'Lexer'


class ParserError(BasicError):
    kind = 'Parser'


class InterpreterError(BasicError):
    kind = 'Interpreter'


@dataclass(frozen=True)
class LoopSignal:
    """Result of executing break/continue, handed up to the enclosing loop."""
    keyword: str  # 'BREAK' or 'CONTINUE'
    position: Position
