## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from . import nodes
from .nodes import Node
from .environment import Environment
from .types import (Object, Integer, Function, ReturnValue, Error, NULL,
                    native_bool, is_abrupt, is_truthy)


INT64_MIN, INT64_MAX = -2**63, 2**63 - 1

def _wrap_int64(value: int) -> int:
    return (value - INT64_MIN) % 2**64 + INT64_MIN

def _divide(lhs: int, rhs: int) -> int:
    # Truncate toward zero like the other integer ops, not Python's floor division.
    quotient = abs(lhs) // abs(rhs)
    return -quotient if (lhs < 0) != (rhs < 0) else quotient


class Evaluator:
    """Recursive tree-walker.  Returns `None` for statements that produce no value, and
    `Error`/`ReturnValue` objects for control flow, which every step hands back untouched.
    """

    def __init__(self, stats: dict | None = None):
        self.stats = stats

    def eval(self, node: Node | None, env: Environment) -> Object | None:
        if self.stats is not None:
            self.stats['steps'] = self.stats.get('steps', 0) + 1

        match node:
            case nodes.Program():
                return self._eval_program(node, env)
            case nodes.BlockStatement():
                return self._eval_block_statement(node, env)
            case nodes.ExpressionStatement():
                return self.eval(node.value, env)
            case nodes.LetStatement():
                value = self._eval_operand(node.value, env)
                if is_abrupt(value): return value
                env.set(node.name.name, value)
                return None
            case nodes.ReturnStatement():
                value = self._eval_operand(node.value, env)
                if is_abrupt(value): return value
                return ReturnValue(value)
            case nodes.Identifier():
                if (value := env.get(node.name)) is None:
                    return Error(f"identifier not found {node.name}")
                return value
            case nodes.IntegerLiteral():
                return Integer(node.value)
            case nodes.Boolean():
                return native_bool(node.value)
            case nodes.PrefixExpression():
                return self._eval_prefix_expression(node, env)
            case nodes.InfixExpression():
                return self._eval_infix_expression(node, env)
            case nodes.IfExpression():
                return self._eval_if_expression(node, env)
            case nodes.FunctionLiteral():
                return Function(node.parameters, node.body, env)
            case nodes.CallExpression():
                return self._eval_call_expression(node, env)
            case None:
                return None
        raise TypeError(f"Cannot evaluate node of type `{type(node).__name__}`.")

    def _eval_operand(self, node: Node | None, env: Environment) -> Object:
        # Statements without a value still count as `null` once used inside an expression.
        value = self.eval(node, env)
        return NULL if value is None else value

    def _eval_program(self, program: nodes.Program, env: Environment) -> Object | None:
        result = NULL
        for statement in program.statements:
            result = self.eval(statement, env)
            if isinstance(result, ReturnValue):
                return result.value
            if isinstance(result, Error):
                return result
        return result

    def _eval_block_statement(self, block: nodes.BlockStatement, env: Environment) -> Object | None:
        block_env = Environment.new_enclosed(env)
        result = NULL
        for statement in block.statements:
            result = self.eval(statement, block_env)
            # Leave the ReturnValue wrapped, the enclosing call or program unwraps it.
            if isinstance(result, (ReturnValue, Error)):
                return result
        return result

    def _eval_prefix_expression(self, node: nodes.PrefixExpression, env: Environment) -> Object:
        right = self._eval_operand(node.right, env)
        if is_abrupt(right): return right

        match node.operator:
            case '!':
                return native_bool(not is_truthy(right))
            case '-' if isinstance(right, Integer):
                return Integer(_wrap_int64(-right.value))
            case '+' if isinstance(right, Integer):
                return right
        return Error(f"unknown operation {node.operator}{right.type}")

    def _eval_infix_expression(self, node: nodes.InfixExpression, env: Environment) -> Object:
        left = self._eval_operand(node.left, env)
        if is_abrupt(left): return left
        right = self._eval_operand(node.right, env)
        if is_abrupt(right): return right

        operator = node.operator
        if isinstance(left, Integer) and isinstance(right, Integer):
            return _eval_integer_infix(operator, left, right)
        if left.type != right.type:
            return Error(f"type mismatch {left.type} {operator} {right.type}")

        # Booleans and null are singletons, functions compare by identity.
        match operator:
            case '==':
                return native_bool(left is right)
            case '!=':
                return native_bool(left is not right)
        return Error(f"unknown operation {left.type} {operator} {right.type}")

    def _eval_if_expression(self, node: nodes.IfExpression, env: Environment) -> Object | None:
        condition = self._eval_operand(node.condition, env)
        if is_abrupt(condition): return condition

        if is_truthy(condition):
            return self.eval(node.consequence, env)
        if node.alternative is not None:
            return self.eval(node.alternative, env)
        return None

    def _eval_call_expression(self, node: nodes.CallExpression, env: Environment) -> Object | None:
        function = self._eval_operand(node.callee, env)
        if is_abrupt(function): return function
        if not isinstance(function, Function):
            return Error(f"invalid function call on {function.inspect()}")

        arguments = []
        for expression in node.arguments:
            value = self._eval_operand(expression, env)
            if is_abrupt(value): return value
            arguments.append(value)

        if len(arguments) != len(function.parameters):
            return Error(f"expected {len(function.parameters)} arguments got only {len(arguments)}")

        call_env = Environment.new_enclosed(function.env)
        for parameter, value in zip(function.parameters, arguments):
            call_env.set(parameter.name, value)

        result = self.eval(function.body, call_env)
        return result.value if isinstance(result, ReturnValue) else result


def _eval_integer_infix(operator: str, left: Integer, right: Integer) -> Object:
    lhs, rhs = left.value, right.value
    match operator:
        case '+':
            return Integer(_wrap_int64(lhs + rhs))
        case '-':
            return Integer(_wrap_int64(lhs - rhs))
        case '*':
            return Integer(_wrap_int64(lhs * rhs))
        case '/':
            if rhs == 0:
                return Error(f"division by zero {left.type} / {right.type}")
            return Integer(_wrap_int64(_divide(lhs, rhs)))
        case '<':
            return native_bool(lhs < rhs)
        case '>':
            return native_bool(lhs > rhs)
        case '==':
            return native_bool(lhs == rhs)
        case '!=':
            return native_bool(lhs != rhs)
    return Error(f"unknown integer operation {left.type} {operator} {right.type}")


def evaluate(node: Node, env: Environment, stats: dict | None = None) -> Object | None:
    """Evaluate `node` against `env`, returning its value, `None` for no value, or an `Error`."""
    try:
        return Evaluator(stats).eval(node, env)
    except RecursionError:
        return Error("maximum recursion depth exceeded")
