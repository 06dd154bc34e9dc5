"""Recursive-descent parser for the BasicSharp language.

The parser reads tokens through a two-token window (current and next) and
remembers the previously consumed token, which is what most productions use
as the position of the node they build. Comment (`rem`) tokens are dropped
whenever the window advances, so they never reach the grammar.

`parse` is a generator: each top-level statement is yielded as soon as it
is complete, so execution can start before the rest of the program has
been read. The first syntax error raises `ParserError` and ends parsing.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from .ast import (
    BinaryOperator, UnaryOperator, Expr, Stmt,
    UnaryOp, BinaryOp, Grouping, Literal, VarRef,
    PrintStmt, InputStmt, LetStmt, ToNumStmt, ToStrStmt, RndStmt,
    Block, IfStmt, WhileStmt, BreakStmt, ContinueStmt,
)
from .errors import ParserError
from .lexer import lex
from .tokens import Position, Token, TokenType


COMPARISON_OPERATORS = {
    TokenType.EQUAL_EQUAL: BinaryOperator.EQ,
    TokenType.NOT_EQUAL: BinaryOperator.NEQ,
    TokenType.GREATER: BinaryOperator.GT,
    TokenType.GREATER_EQUAL: BinaryOperator.GTE,
    TokenType.LESS: BinaryOperator.LT,
    TokenType.LESS_EQUAL: BinaryOperator.LTE,
}

TERM_OPERATORS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
}

FACTOR_OPERATORS = {
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.SLASH: BinaryOperator.DIV,
}


class Parser:
    def __init__(self, tokens: Iterable[Token]):
        self.tokens = iter(tokens)
        self.previous: Optional[Token] = None
        self.current: Optional[Token] = None
        self.next: Optional[Token] = None
        self.advance()
        self.advance()

    # Token window

    def pull(self) -> Token:
        for token in self.tokens:
            if token.type != TokenType.REM:
                return token
        # The lexer always ends with EOF; hand-built streams may not.
        last = self.next or self.current
        position = last.position if last is not None else Position(1, 1)
        return Token(TokenType.EOF, '', None, position)

    def advance(self) -> Token:
        self.previous = self.current
        self.current = self.next
        if self.current is not None and self.current.type == TokenType.EOF:
            self.next = self.current
        else:
            self.next = self.pull()
        return self.previous

    def is_at_end(self) -> bool:
        return self.current.type == TokenType.EOF

    def check(self, *types: TokenType) -> bool:
        return self.current.type in types

    def match(self, *types: TokenType) -> bool:
        if self.check(*types):
            self.advance()
            return True
        return False

    def consume(self, expected: TokenType, message: str) -> Token:
        if self.match(expected):
            return self.previous
        raise self.error(message)

    def error(self, message: str) -> ParserError:
        return ParserError(message, self.current.position)

    # Statements

    def skip_separators(self):
        while self.match(TokenType.SEMICOLON):
            pass

    def parse(self) -> Iterator[Stmt]:
        while not self.is_at_end():
            yield self.declaration()

    def declaration(self) -> Stmt:
        # separators only ever lead a statement
        self.skip_separators()
        if self.match(TokenType.LET):
            return self.let_declaration()
        return self.statement()

    def let_declaration(self) -> LetStmt:
        let_token = self.previous
        name = self.consume(TokenType.IDENTIFIER, "Expected variable name.").literal
        self.consume(TokenType.EQUAL, "Expected '=' after variable name.")
        return LetStmt(let_token.position, name, self.expression())

    def statement(self) -> Stmt:
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.PRINT):
            return PrintStmt(self.previous.position, self.expression())
        if self.match(TokenType.INPUT):
            return self.input_statement()
        if self.match(TokenType.TONUM):
            position = self.previous.position
            source, target = self.conversion_operands()
            return ToNumStmt(position, source, target)
        if self.match(TokenType.TOSTR):
            position = self.previous.position
            source, target = self.conversion_operands()
            return ToStrStmt(position, source, target)
        if self.match(TokenType.RND):
            return self.rnd_statement()
        if self.match(TokenType.BREAK):
            return BreakStmt(self.previous.position)
        if self.match(TokenType.CONTINUE):
            return ContinueStmt(self.previous.position)
        if self.check(TokenType.EOF):
            raise self.error("Unexpected end of file.")
        raise self.error("Statement expected.")

    def if_statement(self) -> IfStmt:
        if_token = self.previous
        condition = self.expression()
        self.consume(TokenType.THEN, "Expected 'then' after condition.")
        then_branch = self.block()
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.block()
        self.consume(TokenType.END, "Expected 'end' at the end of if-else statement.")
        return IfStmt(if_token.position, condition, then_branch, else_branch)

    def while_statement(self) -> WhileStmt:
        while_token = self.previous
        condition = self.expression()
        self.consume(TokenType.DO, "Expected 'do' after condition.")
        body = self.block()
        self.consume(TokenType.END, "Expected 'end' at the end of while statement.")
        return WhileStmt(while_token.position, condition, body)

    def block(self) -> Block:
        position = self.current.position
        statements: List[Stmt] = []
        while not self.is_at_end() and not self.check(TokenType.ELSE, TokenType.END):
            statements.append(self.declaration())
        return Block(position, tuple(statements))

    def input_statement(self) -> InputStmt:
        input_token = self.previous
        prompt = self.expression()
        self.consume(TokenType.COMMA, "Expected ',' after prompt expression.")
        name = self.consume(TokenType.IDENTIFIER, "Expected variable name.").literal
        return InputStmt(input_token.position, prompt, name)

    def conversion_operands(self):
        # tonum/tostr SOURCE [, DESTINATION]; destination defaults to source
        source = self.consume(TokenType.IDENTIFIER, "Expected source variable name.").literal
        target = source
        if self.match(TokenType.COMMA):
            target = self.consume(TokenType.IDENTIFIER, "Expected destination variable name.").literal
        return source, target

    def rnd_statement(self) -> RndStmt:
        rnd_token = self.previous
        name = self.consume(TokenType.IDENTIFIER, "Expected variable name.").literal
        self.consume(TokenType.COMMA, "Expected ',' after variable name.")
        lower = self.expression()
        self.consume(TokenType.COMMA, "Expected ',' after lower bound.")
        upper = self.expression()
        return RndStmt(rnd_token.position, name, lower, upper)

    # Expressions, lowest precedence first

    def expression(self) -> Expr:
        return self.logic_or()

    def logic_or(self) -> Expr:
        expr = self.logic_and()
        while self.match(TokenType.OR):
            operator = self.previous
            expr = BinaryOp(operator.position, BinaryOperator.OR, expr, self.logic_and())
        return expr

    def logic_and(self) -> Expr:
        expr = self.logic_not()
        while self.match(TokenType.AND):
            operator = self.previous
            expr = BinaryOp(operator.position, BinaryOperator.AND, expr, self.logic_not())
        return expr

    def logic_not(self) -> Expr:
        if self.match(TokenType.NOT):
            operator = self.previous
            return UnaryOp(operator.position, UnaryOperator.NOT, self.logic_not())
        return self.comparison()

    def binary_level(self, operators, operand) -> Expr:
        expr = operand()
        while self.match(*operators):
            operator = self.previous
            expr = BinaryOp(operator.position, operators[operator.type], expr, operand())
        return expr

    def comparison(self) -> Expr:
        return self.binary_level(COMPARISON_OPERATORS, self.term)

    def term(self) -> Expr:
        return self.binary_level(TERM_OPERATORS, self.factor)

    def factor(self) -> Expr:
        return self.binary_level(FACTOR_OPERATORS, self.unary)

    def unary(self) -> Expr:
        if self.match(TokenType.MINUS):
            operator = self.previous
            return UnaryOp(operator.position, UnaryOperator.NEGATE, self.unary())
        return self.primary()

    def primary(self) -> Expr:
        if self.match(TokenType.NUMBER, TokenType.STRING, TokenType.BOOLEAN):
            return Literal(self.previous.position, self.previous.literal)
        if self.match(TokenType.LEFT_PAREN):
            paren = self.previous
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expected ')' after expression.")
            return Grouping(paren.position, expr)
        if self.match(TokenType.IDENTIFIER):
            return VarRef(self.previous.position, self.previous.literal)
        raise self.error("Expression expected.")


def parse(tokens: Iterable[Token]) -> Iterator[Stmt]:
    """Lazily parse a token stream into top-level statements."""
    parser = Parser(tokens)
    yield from parser.parse()


def parse_program(source: str) -> List[Stmt]:
    """Lex and parse a whole program eagerly."""
    return list(parse(lex(source)))
