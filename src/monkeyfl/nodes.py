## monkeyfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Syntax tree produced by the parser.  Nodes are frozen once built, and `str(node)` gives
# the canonical source form which parses back to the same tree.
#

from dataclasses import dataclass

from .tokens import Token


class Node:
    token: Token

    def token_literal(self) -> str:
        return self.token.value

class Statement(Node): pass
class Expression(Node): pass


def _str(node: Node | None) -> str:
    # Missing sub-expressions only exist in programs that also have diagnostics.
    return '' if node is None else str(node)

def _join_statements(statements) -> str:
    # An expression statement needs its `;` back when another statement follows it,
    # otherwise `a; -b` would read back as the call `a((-b))`.
    parts = [_str(s) + (';' if isinstance(s, ExpressionStatement) and i < len(statements) - 1 else '')
             for i, s in enumerate(statements)]
    return ' '.join(parts)


@dataclass(frozen=True)
class Program(Node):
    statements: tuple[Statement, ...] = ()

    def token_literal(self) -> str:
        return self.statements[0].token_literal() if self.statements else ''

    def __str__(self):
        return _join_statements(self.statements)


@dataclass(frozen=True)
class Identifier(Expression):
    token: Token
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    token: Token
    value: int

    def __str__(self):
        return self.token.value


@dataclass(frozen=True)
class Boolean(Expression):
    token: Token
    value: bool

    def __str__(self):
        return self.token.value


@dataclass(frozen=True)
class PrefixExpression(Expression):
    token: Token
    operator: str
    right: Expression | None

    def __str__(self):
        return f"({self.operator}{_str(self.right)})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    token: Token
    operator: str
    left: Expression | None
    right: Expression | None

    def __str__(self):
        return f"({_str(self.left)} {self.operator} {_str(self.right)})"


@dataclass(frozen=True)
class LetStatement(Statement):
    token: Token
    name: Identifier
    value: Expression | None

    def __str__(self):
        return f"let {self.name} = {_str(self.value)};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    token: Token
    value: Expression | None

    def __str__(self):
        return f"return {_str(self.value)};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    token: Token
    value: Expression | None

    def __str__(self):
        return _str(self.value)


@dataclass(frozen=True)
class BlockStatement(Statement):
    token: Token
    statements: tuple[Statement, ...] = ()

    def __str__(self):
        if not self.statements:
            return '{ }'
        return '{ ' + _join_statements(self.statements) + ' }'


@dataclass(frozen=True)
class IfExpression(Expression):
    token: Token
    condition: Expression | None
    consequence: BlockStatement
    alternative: BlockStatement | None = None

    def __str__(self):
        text = f"if ({_str(self.condition)}) {self.consequence}"
        if self.alternative is not None:
            text += f" else {self.alternative}"
        return text


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    token: Token
    parameters: tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self):
        return f"fn({', '.join(str(p) for p in self.parameters)}) {self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    token: Token                    # the `(` token
    callee: Expression
    arguments: tuple[Expression, ...] = ()

    def __str__(self):
        return f"{_str(self.callee)}({', '.join(_str(a) for a in self.arguments)})"
