"""Tree-walking interpreter for the BasicSharp language.

The interpreter executes parsed statements one at a time against a single
global environment. Expressions are evaluated eagerly, left operand first,
and every operator checks the types of its operands at runtime.

`break` and `continue` do not raise. Executing them returns a `LoopSignal`
that every enclosing block and `if` hands back unchanged until a `while`
consumes it. A signal that reaches the top level is reported as an
`InterpreterError` at the position of the offending statement.
"""

from __future__ import annotations

import math
import random
from typing import Iterable, Optional, TextIO

from .ast import (
    BinaryOperator, UnaryOperator, Expr, Stmt,
    UnaryOp, BinaryOp, Grouping, Literal, VarRef,
    PrintStmt, InputStmt, LetStmt, ToNumStmt, ToStrStmt, RndStmt,
    Block, IfStmt, WhileStmt, BreakStmt, ContinueStmt,
)
from .console import Console
from .environment import Environment
from .errors import InterpreterError, LoopSignal
from .lexer import lex
from .parser import parse
from .types import (
    Value, is_bool, is_number, is_string, type_name, to_string,
    numbers_equal, numbers_differ, divide, parse_number,
)


class Interpreter:
    """Core interpreter that executes BasicSharp statements."""
    def __init__(self, seed: Optional[int] = None, stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None, debug_level: int = 0,
                 debug_file: str = 'debug.txt'):
        self.env = Environment()
        self.console = Console(stdin, stdout)
        self.random = random.Random(seed)
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp: Optional[TextIO] = None
        self.debug_started = False

    def debug(self, msg: str):
        if self.debug_level <= 0:
            return
        if self.debug_fp is None:
            # opened on first use; later runs append to the same trace
            self.debug_fp = open(self.debug_file, 'a' if self.debug_started else 'w', encoding='utf-8')
            self.debug_started = True
        self.debug_fp.write(msg + '\n')
        self.debug_fp.flush()

    def close(self):
        if self.debug_fp is not None:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, statements: Iterable[Stmt]) -> None:
        """Execute statements in order; `statements` may be a parser generator."""
        try:
            for stmt in statements:
                self.execute(stmt)
        finally:
            self.close()

    def execute(self, stmt: Stmt) -> None:
        """Execute one top-level statement."""
        if self.debug_level >= 1:
            self.debug(f"exec {type(stmt).__name__} at {stmt.position}")
        signal = self.execute_stmt(stmt)
        if signal is not None:
            raise InterpreterError(f"Unexpected '{signal.keyword}' outside of loop", signal.position)

    def assign(self, name: str, value: Value):
        self.env.set(name, value)
        if self.debug_level >= 2:
            self.debug(f"set {name} = {value!r}")

    # Statements
    def execute_block(self, statements: Iterable[Stmt]) -> Optional[LoopSignal]:
        for stmt in statements:
            signal = self.execute_stmt(stmt)
            # propagate loop signals
            if signal is not None:
                return signal
        return None

    def execute_stmt(self, node: Stmt) -> Optional[LoopSignal]:
        if isinstance(node, PrintStmt):
            value = self.evaluate(node.expr)
            self.console.write_line(to_string(value))
            return None
        if isinstance(node, InputStmt):
            prompt = self.evaluate(node.prompt)
            line = self.console.read_line(to_string(prompt))
            self.assign(node.target, line)
            return None
        if isinstance(node, LetStmt):
            self.assign(node.target, self.evaluate(node.expr))
            return None
        if isinstance(node, ToNumStmt):
            source = self.env.get(node.source, node.position)
            if is_bool(source):
                self.assign(node.target, 1.0 if source else 0.0)
            elif is_string(source):
                try:
                    number = parse_number(source)
                except ValueError:
                    raise InterpreterError(f"Cannot convert '{source}' to number.", node.position)
                self.assign(node.target, number)
            else:
                self.assign(node.target, source)
            return None
        if isinstance(node, ToStrStmt):
            source = self.env.get(node.source, node.position)
            self.assign(node.target, to_string(source))
            return None
        if isinstance(node, RndStmt):
            lower = self.evaluate(node.lower)
            upper = self.evaluate(node.upper)
            if not (is_number(lower) and is_number(upper)):
                raise InterpreterError(
                    f"'RND' is not allowed with lowerBound '{type_name(lower)}' "
                    f"and upperBound '{type_name(upper)}'.",
                    node.position,
                )
            raw = self.random.random() * (upper - lower) + lower
            # floor() rejects inf and NaN; those pass through unchanged
            self.assign(node.target, float(math.floor(raw)) if math.isfinite(raw) else raw)
            return None
        if isinstance(node, Block):
            return self.execute_block(node.statements)
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition)
            if not is_bool(cond):
                raise InterpreterError("Expected bool in IF condition", node.position)
            if self.debug_level >= 3:
                self.debug(f"if condition at {node.position} -> {to_string(cond)}")
            if cond:
                return self.execute_stmt(node.then_branch)
            if node.else_branch is not None:
                return self.execute_stmt(node.else_branch)
            return None
        if isinstance(node, WhileStmt):
            return self.execute_while(node)
        if isinstance(node, BreakStmt):
            return LoopSignal('BREAK', node.position)
        if isinstance(node, ContinueStmt):
            return LoopSignal('CONTINUE', node.position)
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def execute_while(self, node: WhileStmt) -> None:
        while True:
            cond = self.evaluate(node.condition)
            if not is_bool(cond):
                raise InterpreterError("Expected bool in WHILE condition", node.position)
            if self.debug_level >= 3:
                self.debug(f"while condition at {node.position} -> {to_string(cond)}")
            if not cond:
                return None
            signal = self.execute_stmt(node.body)
            if signal is None:
                continue
            if self.debug_level >= 3:
                self.debug(f"{signal.keyword.lower()} at {signal.position}")
            if signal.keyword == 'BREAK':
                return None
            # CONTINUE: straight back to the condition

    # Expressions
    def evaluate(self, node: Expr) -> Value:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, VarRef):
            return self.env.get(node.name, node.position)
        if isinstance(node, Grouping):
            return self.evaluate(node.inner)
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand)
            return self.apply_unary_op(node, operand)
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return self.apply_binary_op(node, left, right)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def apply_unary_op(self, node: UnaryOp, operand: Value) -> Value:
        if node.op is UnaryOperator.NEGATE:
            if not is_number(operand):
                raise InterpreterError("Expected number", node.position)
            return -operand
        if node.op is UnaryOperator.NOT:
            if not is_bool(operand):
                raise InterpreterError("Expected bool", node.position)
            return not operand
        raise InterpreterError("Unknown unary operator", node.position)

    def apply_binary_op(self, node: BinaryOp, a: Value, b: Value) -> Value:
        op = node.op
        if op is BinaryOperator.ADD:
            if is_number(a) and is_number(b):
                return a + b
            # If either operand is a string, concatenate canonical forms
            if is_string(a) or is_string(b):
                return to_string(a) + to_string(b)
        elif op in (BinaryOperator.SUB, BinaryOperator.MUL, BinaryOperator.DIV):
            if is_number(a) and is_number(b):
                if op is BinaryOperator.SUB:
                    return a - b
                if op is BinaryOperator.MUL:
                    return a * b
                return divide(a, b)
        elif op in (BinaryOperator.EQ, BinaryOperator.NEQ):
            if is_number(a) and is_number(b):
                return numbers_equal(a, b) if op is BinaryOperator.EQ else numbers_differ(a, b)
            if is_string(a) and is_string(b):
                return (a == b) if op is BinaryOperator.EQ else (a != b)
        elif op in (BinaryOperator.GT, BinaryOperator.GTE, BinaryOperator.LT, BinaryOperator.LTE):
            if is_number(a) and is_number(b):
                if op is BinaryOperator.GT:
                    return a > b
                if op is BinaryOperator.GTE:
                    return a >= b
                if op is BinaryOperator.LT:
                    return a < b
                return a <= b
        elif op in (BinaryOperator.AND, BinaryOperator.OR):
            # both sides are already evaluated: no short-circuit
            if is_bool(a) and is_bool(b):
                return (a and b) if op is BinaryOperator.AND else (a or b)
        raise InterpreterError(
            f"Binary '{op.value}' is not allowed on '{type_name(a)}' and '{type_name(b)}'.",
            node.position,
        )


def run_program(source: str, seed: Optional[int] = None, debug_level: int = 0) -> Interpreter:
    """Convenience function to lex, parse and run a program from a string.

    Statements are executed as they are parsed. Returns the interpreter so
    callers can inspect the final variable values.
    """
    interpreter = Interpreter(seed=seed, debug_level=debug_level)
    interpreter.run(parse(lex(source)))
    return interpreter
