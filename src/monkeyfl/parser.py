## monkeyfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from enum import IntEnum
from typing import Callable

from . import tokens as T
from .tokens import Token
from .lexer import Lexer
from .nodes import (Program, Statement, Expression, LetStatement, ReturnStatement, ExpressionStatement,
                    BlockStatement, Identifier, IntegerLiteral, Boolean, PrefixExpression, InfixExpression,
                    IfExpression, FunctionLiteral, CallExpression)


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2          # == !=
    LESSGREATER = 3     # < >
    SUM = 4             # + -
    PRODUCT = 5         # * /
    PREFIX = 6          # -x !x
    CALL = 7            # f(x)


PRECEDENCES: dict[str, Precedence] = {
    T.EQ: Precedence.EQUALS, T.NOT_EQ: Precedence.EQUALS,
    T.LT: Precedence.LESSGREATER, T.GT: Precedence.LESSGREATER,
    T.PLUS: Precedence.SUM, T.MINUS: Precedence.SUM,
    T.ASTERISK: Precedence.PRODUCT, T.SLASH: Precedence.PRODUCT,
    T.LPAREN: Precedence.CALL,
}

INT64_MAX = 2**63 - 1


class Parser:
    """Pratt parser over a `Lexer`, which records diagnostics instead of raising so that
    a single pass reports every problem it can find.
    """

    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.errors: list[str] = []
        self.error_tokens: list[Token] = []

        self.prefix_fns: dict[str, Callable[[], Expression | None]] = {
            T.IDENT: self._parse_identifier,
            T.INT: self._parse_integer_literal,
            T.TRUE: self._parse_boolean,
            T.FALSE: self._parse_boolean,
            T.BANG: self._parse_prefix_expression,
            T.MINUS: self._parse_prefix_expression,
            T.PLUS: self._parse_prefix_expression,
            T.LPAREN: self._parse_grouped_expression,
            T.IF: self._parse_if_expression,
            T.FUNCTION: self._parse_function_literal,
        }
        self.infix_fns: dict[str, Callable[[Expression | None], Expression | None]] = {
            kind: self._parse_infix_expression for kind in PRECEDENCES if kind != T.LPAREN
        }
        self.infix_fns[T.LPAREN] = self._parse_call_expression

        # Fill both `current` and `next` before parsing anything.
        self.current: Token = self.lexer.next_token()
        self.next: Token = self.lexer.next_token()

    @property
    def incomplete(self) -> bool:
        """True when every diagnostic was caused by input ending too early, so more input may fix it."""
        return bool(self.error_tokens) and all(tok.type == T.EOF for tok in self.error_tokens)

    def parse_program(self) -> tuple[Program, list[str]]:
        statements = []
        while not self._current_is(T.EOF):
            if (statement := self._parse_statement()) is not None:
                statements.append(statement)
            self._advance()
        return Program(tuple(statements)), list(self.errors)

    # Token cursor ────────────────────────────────────────────────────────────────────────────
    def _advance(self) -> None:
        self.current, self.next = self.next, self.lexer.next_token()

    def _current_is(self, kind: str) -> bool:
        return self.current.type == kind

    def _next_is(self, kind: str) -> bool:
        return self.next.type == kind

    def _expect_next(self, kind: str) -> bool:
        if self._next_is(kind):
            self._advance()
            return True
        self._error(f"expected next token to be {kind}, got {self.next.type} instead", self.next)
        return False

    def _skip_semicolon(self) -> None:
        if self._next_is(T.SEMICOLON):
            self._advance()

    def _error(self, message: str, token: Token) -> None:
        self.errors.append(message)
        self.error_tokens.append(token)

    def _next_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.next.type, Precedence.LOWEST)

    def _current_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.current.type, Precedence.LOWEST)

    # Statements ──────────────────────────────────────────────────────────────────────────────
    def _parse_statement(self) -> Statement | None:
        match self.current.type:
            case T.LET:
                return self._parse_let_statement()
            case T.RETURN:
                return self._parse_return_statement()
            case T.SEMICOLON:
                return None
            case _:
                return self._parse_expression_statement()

    def _parse_let_statement(self) -> LetStatement:
        token = self.current
        # Keep going after a missing name or `=`, so later mistakes are reported too.
        self._expect_next(T.IDENT)
        name = Identifier(self.current, self.current.value)
        self._expect_next(T.ASSIGN)

        self._advance()
        value = self._parse_expression(Precedence.LOWEST)
        self._skip_semicolon()
        return LetStatement(token, name, value)

    def _parse_return_statement(self) -> ReturnStatement:
        token = self.current
        self._advance()
        value = self._parse_expression(Precedence.LOWEST)
        self._skip_semicolon()
        return ReturnStatement(token, value)

    def _parse_expression_statement(self) -> ExpressionStatement:
        token = self.current
        value = self._parse_expression(Precedence.LOWEST)
        self._skip_semicolon()
        return ExpressionStatement(token, value)

    def _parse_block_statement(self) -> BlockStatement:
        token = self.current
        self._advance()

        statements = []
        while not self._current_is(T.RBRACE) and not self._current_is(T.EOF):
            if (statement := self._parse_statement()) is not None:
                statements.append(statement)
            self._advance()

        if self._current_is(T.EOF):
            self._error(f"expected next token to be {T.RBRACE}, got {T.EOF} instead", self.current)
        return BlockStatement(token, tuple(statements))

    # Expressions ─────────────────────────────────────────────────────────────────────────────
    def _parse_expression(self, precedence: Precedence) -> Expression | None:
        if (prefix := self.prefix_fns.get(self.current.type)) is None:
            self._error(f"no prefix parse expression for {self.current.type} found", self.current)
            return None
        left = prefix()

        while not self._next_is(T.SEMICOLON) and precedence < self._next_precedence():
            if (infix := self.infix_fns.get(self.next.type)) is None:
                return left
            self._advance()
            left = infix(left)

        return left

    def _parse_identifier(self) -> Identifier:
        return Identifier(self.current, self.current.value)

    def _parse_integer_literal(self) -> IntegerLiteral | None:
        # Literals are unsigned, so only the upper bound can be exceeded.
        digits = self.current.value.lstrip('0') or '0'
        if len(digits) > len(str(INT64_MAX)) or int(digits) > INT64_MAX:
            self._error(f'could not parse "{self.current.value}" as integer', self.current)
            return None
        return IntegerLiteral(self.current, int(digits))

    def _parse_boolean(self) -> Boolean:
        return Boolean(self.current, self._current_is(T.TRUE))

    def _parse_prefix_expression(self) -> PrefixExpression:
        token = self.current
        self._advance()
        right = self._parse_expression(Precedence.PREFIX)
        return PrefixExpression(token, token.value, right)

    def _parse_infix_expression(self, left: Expression | None) -> InfixExpression:
        token = self.current
        precedence = self._current_precedence()
        self._advance()
        right = self._parse_expression(precedence)
        return InfixExpression(token, token.value, left, right)

    def _parse_grouped_expression(self) -> Expression | None:
        self._advance()
        expression = self._parse_expression(Precedence.LOWEST)
        if not self._expect_next(T.RPAREN):
            return None
        return expression

    def _parse_if_expression(self) -> IfExpression | None:
        token = self.current
        if not self._expect_next(T.LPAREN):
            return None

        self._advance()
        condition = self._parse_expression(Precedence.LOWEST)
        if not self._expect_next(T.RPAREN) or not self._expect_next(T.LBRACE):
            return None
        consequence = self._parse_block_statement()

        alternative = None
        if self._next_is(T.ELSE):
            self._advance()
            if not self._expect_next(T.LBRACE):
                return None
            alternative = self._parse_block_statement()

        return IfExpression(token, condition, consequence, alternative)

    def _parse_function_literal(self) -> FunctionLiteral | None:
        token = self.current
        if not self._expect_next(T.LPAREN):
            return None
        if (parameters := self._parse_function_parameters()) is None:
            return None
        if not self._expect_next(T.LBRACE):
            return None
        return FunctionLiteral(token, tuple(parameters), self._parse_block_statement())

    def _parse_function_parameters(self) -> list[Identifier] | None:
        parameters = []
        if self._next_is(T.RPAREN):
            self._advance()
            return parameters

        while self._expect_next(T.IDENT):
            parameters.append(Identifier(self.current, self.current.value))
            if not self._next_is(T.COMMA):
                break
            self._advance()

        if not self._expect_next(T.RPAREN):
            return None
        return parameters

    def _parse_call_expression(self, callee: Expression | None) -> CallExpression | None:
        token = self.current
        if (arguments := self._parse_call_arguments()) is None:
            return None
        return CallExpression(token, callee, tuple(arguments))

    def _parse_call_arguments(self) -> list[Expression | None] | None:
        arguments = []
        if self._next_is(T.RPAREN):
            self._advance()
            return arguments

        self._advance()
        arguments.append(self._parse_expression(Precedence.LOWEST))
        while self._next_is(T.COMMA):
            self._advance(); self._advance()
            arguments.append(self._parse_expression(Precedence.LOWEST))

        if not self._expect_next(T.RPAREN):
            return None
        return arguments


def parse(source: str) -> tuple[Program, list[str]]:
    return Parser(Lexer(source)).parse_program()


def format_parse_error_context(filename, line, column, token_value, source=None):
    lines = source.splitlines(keepends=True) if source is not None else open(filename, 'r').readlines()
    start_line, end_line = max(0, line - 3), min(len(lines), line + 2)
    result = [f"\033[97m  File \"{filename}\", line {line}\033[0m"]

    width = max(len(token_value), 1)
    for i in range(start_line, end_line):
        line_content = lines[i].rstrip('\n')
        line_color = '\033[90m'
        if i+1 == line:
            line_color = '\033[97m'
            if 0 < column <= len(line_content):
                line_content = (
                    line_content[:column-1] +
                    f"\033[48;5;30m\033[1;97m{line_content[column-1:column+width-1]}\033[0m" +
                    line_content[column+width-1:]
                )
        result.append(f"{line_color}{i+1:>5} |\033[0m {line_content}")
    return '\n' + '\n'.join(result) + '\n'
