# BasicSharp language package
# This package provides a lexer, parser and interpreter for the BasicSharp language.
from .errors import BasicError, LexerError, ParserError, InterpreterError
from .interpreter import Interpreter, run_program
from .lexer import lex
from .parser import parse, parse_program

__all__ = [
    'BasicError',
    'LexerError',
    'ParserError',
    'InterpreterError',
    'Interpreter',
    'run_program',
    'lex',
    'parse',
    'parse_program',
]
