"""Abstract Syntax Tree (AST) definitions for the BasicSharp language.

The AST classes defined in this module represent the syntactic structure
of parsed BasicSharp programs. There are two closed families: expressions,
which evaluate to a value, and statements, which are executed for their
effect. Every node records the source position it was parsed from so that
runtime errors can point back into the program. Nodes are frozen; the
interpreter only ever reads them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .tokens import Position


class UnaryOperator(Enum):
    NEGATE = '-'
    NOT = 'not'


class BinaryOperator(Enum):
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    EQ = '=='
    NEQ = '<>'
    GT = '>'
    GTE = '>='
    LT = '<'
    LTE = '<='
    AND = 'and'
    OR = 'or'


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    position: Position


# Expressions

@dataclass(frozen=True)
class UnaryOp(Node):
    op: UnaryOperator
    operand: 'Expr'


@dataclass(frozen=True)
class BinaryOp(Node):
    op: BinaryOperator
    left: 'Expr'
    right: 'Expr'


@dataclass(frozen=True)
class Grouping(Node):
    inner: 'Expr'


@dataclass(frozen=True)
class Literal(Node):
    value: Union[float, str, bool]


@dataclass(frozen=True)
class VarRef(Node):
    name: str


Expr = Union[UnaryOp, BinaryOp, Grouping, Literal, VarRef]


# Statements

@dataclass(frozen=True)
class PrintStmt(Node):
    expr: Expr


@dataclass(frozen=True)
class InputStmt(Node):
    prompt: Expr
    target: str


@dataclass(frozen=True)
class LetStmt(Node):
    target: str
    expr: Expr


@dataclass(frozen=True)
class ToNumStmt(Node):
    source: str
    target: str


@dataclass(frozen=True)
class ToStrStmt(Node):
    source: str
    target: str


@dataclass(frozen=True)
class RndStmt(Node):
    target: str
    lower: Expr
    upper: Expr


@dataclass(frozen=True)
class Block(Node):
    statements: Tuple['Stmt', ...]


@dataclass(frozen=True)
class IfStmt(Node):
    condition: Expr
    then_branch: 'Stmt'
    else_branch: Optional['Stmt']


@dataclass(frozen=True)
class WhileStmt(Node):
    condition: Expr
    body: 'Stmt'


@dataclass(frozen=True)
class BreakStmt(Node):
    pass


@dataclass(frozen=True)
class ContinueStmt(Node):
    pass


Stmt = Union[
    PrintStmt, InputStmt, LetStmt, ToNumStmt, ToStrStmt, RndStmt,
    Block, IfStmt, WhileStmt, BreakStmt, ContinueStmt,
]
